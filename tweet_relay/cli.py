"""Command line driver: post a local image through the relay."""

import asyncio
import base64
import json
from pathlib import Path
from typing import Optional

import httpx
import typer

from .main import create_app

app = typer.Typer(
    name="tweet-relay",
    help="Post images through the tweet relay",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Tweet relay command line tools."""


async def _relay(body: dict, url: Optional[str]) -> httpx.Response:
    if url:
        async with httpx.AsyncClient(timeout=60.0) as client:
            return await client.post(url, json=body)

    # In-process: same handler, credentials from the environment
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://relay") as client:
        return await client.post("/", json=body)


@app.command()
def post(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Image file to post"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Send to a deployed relay instead of running in-process"),
):
    """Base64-encode IMAGE, relay it and print the JSON response."""
    data = base64.b64encode(image.read_bytes()).decode("ascii")

    response = asyncio.run(_relay({"data": data}, url))

    try:
        typer.echo(json.dumps(response.json(), indent=2))
    except ValueError:
        typer.echo(f"{response.status_code} {response.text}")

    if response.status_code != 200:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
