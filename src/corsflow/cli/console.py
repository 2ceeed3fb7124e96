# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

CORSFLOW_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "corsflow": "bold magenta",
    "dim": "dim",
})

console = Console(theme=CORSFLOW_THEME)
err_console = Console(theme=CORSFLOW_THEME, stderr=True)


def print_header_table(title: str, rows: list[tuple[str, str]], key_label: str = "Header") -> None:
    """Print name/value pairs as a two-column table."""
    table = Table(title=f"[corsflow]{title}[/corsflow]", border_style="dim")
    table.add_column(key_label, style="info")
    table.add_column("Value")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)
