import typer
import requests
import os


app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


@app.command()
def state():
    r = requests.get(f"{BASE}/state", headers=_headers())
    typer.echo(r.json())


@app.command()
def generate():
    r = requests.post(f"{BASE}/generate", headers=_headers())
    typer.echo(r.json())


@app.command()
def actual(values: list[str]):
    r = requests.post(f"{BASE}/actual", json={"values": values}, headers=_headers())
    typer.echo(r.json())


@app.command()
def wave(values: list[str]):
    r = requests.put(f"{BASE}/wave", json={"values": values}, headers=_headers())
    typer.echo(r.json())


@app.command()
def settings(entropy: float = typer.Option(None), voice: bool = typer.Option(None)):
    r = requests.put(f"{BASE}/settings", json={"entropy": entropy, "voice_enabled": voice}, headers=_headers())
    typer.echo(r.json())


@app.command()
def hit(value: str, position: int, status: str = typer.Option("Exact")):
    slot = "Centena" if position == 7 else "Milhar"
    r = requests.post(f"{BASE}/hits", json={"value": value, "type": slot, "position": position, "status": status}, headers=_headers())
    typer.echo(r.json())


@app.command()
def rectify(generated: str, actual: str, position: int):
    slot = "Centena" if position == 7 else "Milhar"
    body = {"generated": generated, "actual": actual, "type": slot, "rank_label": f"{position}º PRÊMIO"}
    r = requests.post(f"{BASE}/rectifications", json=body, headers=_headers())
    typer.echo(r.json())


@app.command()
def chat(text: str):
    r = requests.post(f"{BASE}/chat", json={"messages": [{"role": "user", "text": text}]}, headers=_headers())
    typer.echo(r.json())


if __name__ == "__main__":
    app()
