"""
cryonics_core.orgs
Static organisation metadata: explicit lookup + default filling.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from .config import EM_DASH, ORG_METADATA
from .utils import lookup_key

@dataclass(frozen=True)
class OrgInfo:
    name: str
    domain: str = ""
    location: str = EM_DASH
    founded: str = EM_DASH
    logo: str = ""

    @property
    def url(self) -> str:
        return f"https://{self.domain}" if self.domain else ""

    @property
    def has_identity(self) -> bool:
        return bool(self.logo)

def build_metadata(raw: Mapping[str, Mapping[str, str]] = ORG_METADATA) -> Dict[str, OrgInfo]:
    out: Dict[str, OrgInfo] = {}
    for key, entry in raw.items():
        out[lookup_key(key)] = OrgInfo(
            name=entry.get("name") or key,
            domain=entry.get("domain", ""),
            location=entry.get("location") or EM_DASH,
            founded=entry.get("founded") or EM_DASH,
            logo=entry.get("logo", ""),
        )
    return out

DEFAULT_METADATA = build_metadata()

def lookup(name: str, metadata: Optional[Mapping[str, OrgInfo]] = None) -> Optional[OrgInfo]:
    table = DEFAULT_METADATA if metadata is None else metadata
    return table.get(lookup_key(name))

def org_or_default(name: str, metadata: Optional[Mapping[str, OrgInfo]] = None) -> OrgInfo:
    """Known org, or placeholders carrying the name as it appeared in the CSV."""
    found = lookup(name, metadata)
    if found is not None:
        return found
    return OrgInfo(name=name)
