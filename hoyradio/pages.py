"""Text and HTML bodies served by the measurement web server."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Union

Pairs = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _pairs(values: Pairs) -> list[tuple[str, Any]]:
    if isinstance(values, Mapping):
        return list(values.items())
    return list(values)


def _text(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def help_page() -> str:
    """HTML page listing the available endpoints."""
    return (
        "<html>"
        "<body><h2>Hilfe</h2>"
        "<br><br><table>"
        "<tr><td>/</td><td>zeigt alle Messwerte in einer Tabelle; refresh alle 10 Sekunden</td></tr>"
        "<tr><td>/data</td><td>zum Abruf der Messwerte in der Form Name=wert</td></tr>"
        "<tr><td>:{port+1}/update</td><td>OTA</td></tr>"
        "<tr><td>/reboot</td><td>startet neu</td></tr>"
        "</table></body></html>"
    )


def root_page(uri: str, values: Pairs) -> str:
    """HTML table of all channel values, refreshing every 10 seconds."""
    parts = [
        f'<html><head><meta http-equiv="refresh" content="10":URL="{uri}"></head>',
        "<body>",
        "<h2>Hoymiles Micro-Inverter HM-600</h2>",
        "<br><br><table border='1'>",
        "<tr><th>Kanal</th><th>Wert</th></tr>",
    ]
    for name, value in _pairs(values):
        parts.append(f"<tr><td>{name}</td>")
        parts.append(f"<td>{_text(value)}</td></tr>")
    parts.append("</table>")
    parts.append("</body></html>")
    return "".join(parts)


def data_text(values: Pairs) -> str:
    """Plain text of ``name=value`` lines."""
    return "".join(f"{name}={_text(value)}\n" for name, value in _pairs(values))


def not_found_text(uri: str, method: str, args: Pairs) -> str:
    """Plain-text body describing an unknown request."""
    pairs = _pairs(args)
    shown_method = "GET" if method.upper() == "GET" else "POST"
    lines = [
        f"URI: {uri}",
        f"\nMethod: {shown_method}",
        f"\nArguments: {len(pairs)}\n",
    ]
    lines.extend(f" NAME:{name}\n VALUE:{value}\n" for name, value in pairs)
    return "".join(lines)