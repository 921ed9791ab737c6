"""
namedroutes CLI - styled output primitives built on Click.

    success(), error(), info()
    kv()     - aligned key-value pair
    table()  - minimal aligned table

click.style handles NO_COLOR / TERM=dumb, so output degrades gracefully.
"""

from typing import Optional, Sequence

import click

_L_H = "\u2500"  # ─
CHECK = "\u2713"  # ✓
CROSS = "\u2717"  # ✗


def success(message: str) -> None:
    """Print success message in green."""
    click.echo(click.style(message, fg="green"))


def error(message: str) -> None:
    """Print error message in red (to stderr)."""
    click.echo(click.style(message, fg="red"), err=True)


def info(message: str) -> None:
    """Print info message in cyan."""
    click.echo(click.style(message, fg="cyan"))


def kv(
    key: str,
    value: str,
    *,
    key_width: int = 12,
    indent: int = 2,
    key_fg: str = "white",
    val_fg: str = "cyan",
) -> None:
    """
    Print an aligned key-value pair.

        pattern:    /users/{id}
        regex:      /users/(?P<_p0>[^/]+)/?
    """
    prefix = " " * indent
    k = click.style(f"{key}:", fg=key_fg)
    v = click.style(str(value), fg=val_fg)
    padding = " " * max(1, key_width - len(key) - 1)
    click.echo(f"{prefix}{k}{padding}{v}")


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    col_widths: Optional[Sequence[int]] = None,
    header_fg: str = "cyan",
    indent: int = 2,
) -> None:
    """
    Print a minimal aligned table.

        Name           Pattern                 Methods
        ────────────── ─────────────────────── ────────
        users.show     /users/{id}             GET
    """
    prefix = " " * indent

    if col_widths is None:
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row[:len(headers)]):
                widths[i] = max(widths[i], len(str(cell)))
        widths = [w + 2 for w in widths]
    else:
        widths = list(col_widths)

    header = "".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(f"{prefix}{click.style(header, fg=header_fg, bold=True)}")
    click.echo(f"{prefix}{click.style(''.join(_L_H * w for w in widths), dim=True)}")

    for row in rows:
        line = "".join(
            str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
            for i, cell in enumerate(row)
        )
        click.echo(f"{prefix}{line}")
