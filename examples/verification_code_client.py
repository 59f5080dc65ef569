#!/usr/bin/env python3

import asyncio
from typing import Dict, Optional

import click
import httpx


async def show(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    r = await client.request(method, url, **kwargs)
    print(f"{method} {url} -> {r.status_code}: {r.text}")
    return r


async def run(base: str, api_key: Optional[str], ttl: int) -> None:
    headers: Dict[str, str] = {"x-api-key": api_key} if api_key else {}

    async with httpx.AsyncClient(base_url=base, timeout=10.0, headers=headers) as client:
        # Plain key/value with a short TTL
        await show(client, "PUT", "/item/greeting", content="hello", headers={"X-TTL-Seconds": str(ttl)})
        await show(client, "GET", "/item/greeting")

        # Extract a 6-digit code from an SMS-style message
        sms = "Your verification code is 482913. Order #1234 ships tomorrow."
        await show(client, "POST", "/extractCode/otp", content=sms, headers={"x-digits": "6"})
        await show(client, "GET", "/item/otp")

        # Alphanumeric code sent as JSON, parameters via the query string
        await show(
            client,
            "POST",
            "/extractCode/activation?digits=6&characterType=alphanumeric",
            json={"text": "Please enter ABC123 to activate. Support line 555012."},
        )
        await show(client, "GET", "/item/activation")

        # Clean up; deleting twice is fine
        await show(client, "DELETE", "/item/otp")
        await show(client, "DELETE", "/item/otp")
        await show(client, "GET", "/item/otp")


@click.command()
@click.option("--base", default="http://127.0.0.1:3000", help="Base URL of the kv-store server")
@click.option("--api-key", default=None, help="API key, when the server runs with API_KEY set")
@click.option("--ttl", default=60, help="TTL in seconds for the demo item")
def main(base: str, api_key: Optional[str], ttl: int) -> None:
    asyncio.run(run(base, api_key, ttl))


if __name__ == "__main__":
    main()
