#!/usr/bin/env python
"""
Sensor simulator for the Cold Chain Monitor API

Posts a temperature/humidity reading for every storage unit on a fixed
interval.  Temperatures drift around each unit's nominal value and
occasionally spike, so breach alerts show up on the dashboard.

Usage:
    python scripts/simulate_sensor.py
    python scripts/simulate_sensor.py --base-url http://localhost:8000 --interval 5 --rounds 20
"""

import argparse
import asyncio
import random

import httpx

NOMINAL_TEMP = {
    "Truck": 5.0,
    "Cold Room": -20.0,
    "Warehouse": 2.0,
}


class SensorSimulator:
    def __init__(self, base_url: str, spike_chance: float):
        self.base_url = base_url.rstrip("/")
        self.spike_chance = spike_chance
        self.sent = 0
        self.alerts = 0

    def next_temperature(self, storage_type: str) -> float:
        temp = NOMINAL_TEMP.get(storage_type, 4.0) + random.uniform(-1.5, 1.5)
        if random.random() < self.spike_chance:
            temp += random.choice([-1, 1]) * random.uniform(5, 10)
        return round(temp, 1)

    async def send_round(self, client: httpx.AsyncClient) -> None:
        response = await client.get(f"{self.base_url}/api/storage-units/")
        response.raise_for_status()

        for unit in response.json():
            payload = {
                "storage_unit_id": unit["id"],
                "temperature": self.next_temperature(unit["type"]),
                "humidity": round(random.uniform(40, 90), 1),
            }
            result = await client.post(f"{self.base_url}/api/sensor-data/", json=payload)
            if result.status_code != 201:
                print(f"❌ {unit['name']}: HTTP {result.status_code} {result.text[:120]}")
                continue

            self.sent += 1
            body = result.json()
            if body["alert"]:
                self.alerts += 1
                print(f"🚨 {body['alert']['message']}")
            else:
                print(f"✅ {unit['name']}: {payload['temperature']}°C")

    async def run(self, interval: float, rounds: int) -> None:
        async with httpx.AsyncClient(timeout=10.0) as client:
            done = 0
            while rounds <= 0 or done < rounds:
                try:
                    await self.send_round(client)
                except httpx.HTTPError as e:
                    print(f"❌ Request failed: {e}")
                done += 1
                await asyncio.sleep(interval)

        print(f"\nSent {self.sent} readings, {self.alerts} alert(s).")


def main():
    parser = argparse.ArgumentParser(description="Simulate cold-chain sensors")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--interval", type=float, default=10.0, help="seconds between rounds")
    parser.add_argument("--rounds", type=int, default=0, help="0 = run until interrupted")
    parser.add_argument("--spike-chance", type=float, default=0.15)
    args = parser.parse_args()

    simulator = SensorSimulator(args.base_url, args.spike_chance)
    try:
        asyncio.run(simulator.run(args.interval, args.rounds))
    except KeyboardInterrupt:
        print(f"\nStopped. Sent {simulator.sent} readings, {simulator.alerts} alert(s).")


if __name__ == "__main__":
    main()
