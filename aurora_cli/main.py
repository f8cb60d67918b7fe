from __future__ import annotations

import base64
import os
from pathlib import Path
from typing import Any, Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from aurora_oracle.models import WeatherReport


app = typer.Typer(help="Aurora forecasts, photo advice and chat from the command line.")
console = Console()
err_console = Console(stderr=True)


def _base_url() -> str:
    return os.getenv("AURORA_URL", "http://localhost:3003").rstrip("/")


def _headers() -> dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    api_key = os.getenv("AURORA_API_KEY")
    if api_key:
        headers["X-API-KEY"] = api_key
    return headers


def _post(path: str, body: dict[str, Any], timeout: float = 60) -> Any:
    try:
        resp = httpx.post(f"{_base_url()}{path}", json=body, headers=_headers(), timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        err_console.print(f"Request failed: {e}", style="bold red")
        raise typer.Exit(code=1)
    return resp.json()


def _delete(path: str, timeout: float = 10) -> None:
    try:
        resp = httpx.delete(f"{_base_url()}{path}", headers=_headers(), timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        err_console.print(f"Could not close session: {e}", style="dim")


def _report(data: Optional[dict[str, Any]]) -> Optional[WeatherReport]:
    if not data:
        return None
    try:
        return WeatherReport.model_validate(data)
    except ValidationError as e:
        err_console.print(f"Ignoring malformed forecast data: {e.error_count()} error(s)", style="yellow")
        return None


def render_forecast(result: dict[str, Any], imperial: bool = False) -> None:
    raw_text = result.get("rawText") or ""
    report = _report(result.get("data"))
    if raw_text:
        console.print(raw_text)
        console.print()
    if report is None:
        console.print("No structured forecast in this reply.", style="yellow")
    else:
        table = Table(title=f"Aurora outlook · {report.location_name}")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_row("Kp index", f"{report.kp_index:g}")
        table.add_row("Solar wind", report.wind_speed_display("imperial" if imperial else "metric"))
        table.add_row("Density", f"{report.solar_wind_density:g} p/cm³")
        table.add_row("Bz", f"{report.bz:g} nT")
        table.add_row("Probability", f"{report.probability_score}%")
        table.add_row("Visibility", report.visibility_chance.value)
        table.add_row("Tonight", report.tonights_window)
        detection = report.nearest_detection
        if detection:
            table.add_row("Nearest detection", f"{detection.location} ({detection.status})")
        flare = report.solar_flare
        if flare and flare.is_significant:
            style = "bold red" if flare.is_x_class else "yellow"
            table.add_row("Solar flare", f"{flare.flare_class} @ {flare.time}", style=style)
        elif flare:
            table.add_row("Solar flare", "Quiet Sun")
        console.print(table)

        for p in report.forecast:
            console.print(f"{p.time:>4} {'█' * round(p.kp)} {p.kp:g}")

    sources = result.get("sources") or []
    if sources:
        console.print("\nSources:", style="bold")
        for s in sources:
            console.print(f"- {s.get('title')}: {s.get('uri')}", style="dim")


def render_photo(analysis: Optional[dict[str, Any]]) -> None:
    if not analysis:
        console.print("Could not analyze this photo. Try another image.", style="bold red")
        return
    settings = analysis.get("recommendedSettings") or {}
    table = Table(title="Photo advice")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Cloud cover", str(analysis.get("cloudCover")))
    table.add_row("Darkness", str(analysis.get("darknessRating")))
    table.add_row("ISO", str(settings.get("iso")))
    table.add_row("Shutter", str(settings.get("shutterSpeed")))
    table.add_row("Aperture", str(settings.get("aperture")))
    table.add_row("Focus", str(settings.get("focus")))
    console.print(table)
    for i, item in enumerate(analysis.get("checklist") or [], start=1):
        console.print(f"{i}. {item}")
    console.print(analysis.get("feedback", ""), style="italic")


@app.command()
def forecast(
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude in degrees (default location if omitted)."),
    lon: Optional[float] = typer.Option(None, "--lon", help="Longitude in degrees (default location if omitted)."),
    imperial: bool = typer.Option(False, "--imperial", help="Show solar wind speed in mph."),
) -> None:
    """Fetch the current aurora forecast for a location."""
    with console.status("Scanning the magnetosphere..."):
        result = _post("/forecast", {"latitude": lat, "longitude": lon})
    render_forecast(result, imperial=imperial)


@app.command()
def photo(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Sky photo to analyze."),
    device: str = typer.Option("Smartphone", "--device", "-d", help="Camera type, e.g. 'DSLR/Mirrorless'."),
) -> None:
    """Get camera settings and a checklist for a sky photo."""
    image = base64.b64encode(path.read_bytes()).decode("ascii")
    with console.status("Analyzing sky conditions..."):
        result = _post("/photo/analyze", {"image": image, "device": device})
    render_photo(result.get("analysis"))


@app.command()
def chat() -> None:
    """Talk to the aurora assistant (type 'exit' to quit)."""
    session = _post("/chat/sessions", {})
    session_id = session["sessionId"]
    for msg in session.get("messages", []):
        console.print(msg.get("text", ""), style="cyan")

    try:
        while True:
            try:
                user_in = typer.prompt("You")
            except (EOFError, KeyboardInterrupt, typer.Abort):
                break
            lower = user_in.strip().lower()
            if not lower:
                continue
            if lower in {"exit", "quit", "q"}:
                break
            with console.status("Transmitting..."):
                reply = _post(f"/chat/sessions/{session_id}/messages", {"message": user_in.strip()})
            console.print(reply.get("text", ""), style="cyan")
    finally:
        _delete(f"/chat/sessions/{session_id}")


if __name__ == "__main__":
    app()
