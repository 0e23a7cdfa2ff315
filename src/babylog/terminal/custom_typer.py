# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer.core


class AliasedTyperGroup(typer.core.TyperGroup):
    """Group whose command names may list aliases, e.g. "list, ls"."""

    _ALIAS_SEPARATOR = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.resolve_alias(cmd_name))

    def resolve_alias(self, name: str) -> str:
        """The registered "name, alias" key for `name`, or `name` unchanged."""
        for registered in self.commands:
            if name in self._ALIAS_SEPARATOR.split(registered):
                return registered
        return name

    def add_command(self, cmd: click.Command, name: Optional[str] = None) -> None:
        name = name if name is not None else cmd.name
        resolved = self.resolve_alias(name or "")
        # Already registered under its aliased name
        if resolved != name and resolved in self.commands:
            return
        super().add_command(cmd, name)


class OrderedAliasedTyperGroup(AliasedTyperGroup):
    """Top-level group: feeding, sleep, then config in help output."""

    desired_order = ["feeding, f", "sleep, s", "config, c"]

    def list_commands(self, ctx: click.Context) -> list[str]:
        ordered = [name for name in self.desired_order if name in self.commands]
        return ordered + [name for name in self.commands if name not in ordered]
