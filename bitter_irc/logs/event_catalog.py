"""Human-readable templates for ``log_event`` calls, grouped by domain."""

from __future__ import annotations

import json
from pathlib import Path

DEFAULT_TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")


class EventCatalog:
    """Maps ``(domain, action)`` to a ``str.format`` template.

    The JSON source is an object of domains, each an object of
    ``action: template`` strings. Entries of any other shape are ignored.
    """

    def __init__(self, domains: dict[str, dict[str, str]] | None = None) -> None:
        self._domains: dict[str, dict[str, str]] = domains or {}
        self.source: Path | None = None

    def __contains__(self, key: tuple[str, str]) -> bool:
        domain, action = key
        return action in self._domains.get(domain, {})

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._domains.values())

    def template_for(self, domain: str, action: str) -> str | None:
        return self._domains.get(domain, {}).get(action)

    def render(self, domain: str, action: str, context: dict[str, object]) -> str | None:
        """Fill the template for an event, or return ``None`` if none is known.

        Missing or malformed placeholders leave the template text unformatted.
        """
        template = self.template_for(domain, action)
        if not template:
            return None
        try:
            return template.format(**context)
        except (KeyError, IndexError, ValueError):
            return template

    def load(self, path: Path | None = None) -> None:
        """Replace the catalog with the contents of ``path``.

        Load failures are recorded as an ``app/load_error`` entry rather than
        raised, since logging must keep working without templates.
        """
        path = path or DEFAULT_TEMPLATES_PATH
        self.source = path
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self._domains = {"app": {"load_error": "Event templates file missing"}}
            return
        except (OSError, ValueError) as e:
            reason = f"Failed to load event templates: {e}"[:200]
            self._domains = {"app": {"load_error": reason}}
            return
        self._domains = _parse_domains(raw)

    def as_dict(self) -> dict[tuple[str, str], str]:
        return {
            (domain, action): template
            for domain, actions in self._domains.items()
            for action, template in actions.items()
        }


def _parse_domains(raw: object) -> dict[str, dict[str, str]]:
    if not isinstance(raw, dict):
        return {}
    domains: dict[str, dict[str, str]] = {}
    for domain, actions in raw.items():
        if not isinstance(actions, dict):
            continue
        kept = {
            action: template
            for action, template in actions.items()
            if isinstance(template, str)
        }
        if kept:
            domains[domain] = kept
    return domains


catalog = EventCatalog()
catalog.load()

__all__ = ["DEFAULT_TEMPLATES_PATH", "EventCatalog", "catalog"]
