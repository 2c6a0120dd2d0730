"""Data types shared by the command parser, router and routines."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Verb(Enum):
    """Subcommands understood by the mod command."""
    SEARCH = "search"
    INSTALL = "install"
    UNINSTALL = "uninstall"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["Verb"]:
        """Match a verb token case-insensitively, or return None."""
        if not token:
            return None
        try:
            return cls(token.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Command:
    """A parsed mod command: one verb plus its optional payload."""
    verb: Verb
    payload: Optional[str] = None

    @property
    def requires_mod_id(self) -> bool:
        return self.verb is not Verb.SEARCH


class ModDescriptor(BaseModel):
    """Catalog entry describing one mod."""

    model_config = ConfigDict(extra="allow")

    description: str = Field(
        default="",
        description="Human-readable description of the mod"
    )


class SearchResult(BaseModel):
    """Result of a repository search."""

    model_config = ConfigDict(populate_by_name=True)

    mod_ids: List[str] = Field(
        default_factory=list,
        alias="modIds",
        description="Matching mod identifiers in display order"
    )

    res: Dict[str, ModDescriptor] = Field(
        default_factory=dict,
        description="Mod descriptors keyed by namespaced mod key"
    )

    def describe(self, mod_id: str, prefix: str) -> str:
        """Description of a mod, looked up under its namespaced key."""
        descriptor = self.res.get(f"{prefix}{mod_id}")
        return descriptor.description if descriptor else ""

    @property
    def id_width(self) -> int:
        """Width of the longest identifier, 0 when there are none."""
        return max((len(mod_id) for mod_id in self.mod_ids), default=0)


@dataclass(frozen=True)
class ModInfo:
    """Identity of the mod that hosts the command."""
    name: str
    desc: str
    author: str


@dataclass(frozen=True)
class CommandSpec:
    """Metadata a host needs to expose the mod command."""
    name: str
    description: str
    min_permission: str
    pattern: "re.Pattern[str]"
    help: List[str] = field(default_factory=list)

    def render_help(self, cmd: Optional[str] = None, nick: str = "") -> List[str]:
        """Help lines with ``{cmd}`` and ``{nick}`` filled in."""
        cmd = cmd or self.name
        return [
            line.replace("{cmd}", cmd).replace("{nick}", nick)
            for line in self.help
        ]


COMMAND_PATTERN: "re.Pattern[str]" = re.compile(
    r"^(search|install|uninstall)(?:\s+(.+))?$",
    re.IGNORECASE
)
