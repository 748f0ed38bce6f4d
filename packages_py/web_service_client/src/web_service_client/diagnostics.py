"""
Debug diagnostics for web_service_client.

Renders request/response traces with Rich panels on stderr. Every printer
here is a no-op unless the owning logger is enabled for DEBUG, so production
control flow never depends on it.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

SENSITIVE_HEADERS = frozenset(
    {"authorization", "x-api-key", "x-jfrog-art-api", "cookie", "set-cookie"}
)

_console = Console(stderr=True)


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """Mask sensitive values for logging."""
    if not value:
        return "<none>"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_headers(
    headers: Mapping[str, str],
    extra_sensitive: Optional[frozenset] = None,
) -> Dict[str, str]:
    """Return a copy of ``headers`` with credential-bearing values masked."""
    sensitive = SENSITIVE_HEADERS | (extra_sensitive or frozenset())
    masked = dict(headers)
    for key in masked:
        if key.lower() in sensitive:
            # Keep the scheme visible ("Basic ***", "Bearer ***")
            scheme, _, secret = masked[key].partition(" ")
            if secret and scheme in ("Basic", "Bearer"):
                masked[key] = f"{scheme} {mask_sensitive(secret)}"
            else:
                masked[key] = mask_sensitive(masked[key])
    return masked


def format_body(body: Any) -> str:
    """Format a body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    if isinstance(body, str):
        try:
            return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
        except ValueError:
            return body
    return str(body)


def print_request(
    logger: logging.Logger,
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
) -> None:
    """Print a request panel when DEBUG is enabled."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    _console.print(
        Panel(f"[bold cyan]{method}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]")
    )
    _console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if body is not None:
        _console.print(
            Panel(Syntax(format_body(body), "json", theme="monokai"), title="[bold]Request Body[/bold]")
        )


def print_response(
    logger: logging.Logger,
    url: str,
    status_code: int,
    reason_phrase: Optional[str],
    body: Any = None,
) -> None:
    """Print a response panel when DEBUG is enabled."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    color = "green" if 200 <= status_code < 300 else "red"
    _console.print(
        Panel(
            f"[bold {color}]{status_code}[/bold {color}] {reason_phrase or ''}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    if body:
        _console.print(
            Panel(
                Syntax(format_body(body), "json", theme="monokai"),
                title=f"[bold]Response Body[/bold] (URL: {url})",
            )
        )
