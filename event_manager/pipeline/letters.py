"""Thank-you letter rendering and writing."""

from __future__ import annotations

import html
from pathlib import Path
from string import Template

from event_manager.common.errors import LetterWriteError
from event_manager.common.fs import read_text, write_text
from event_manager.common.models import EnrichedRecord, LookupResult
from event_manager.common.normalizers import letter_slug


def legislators_html(result: LookupResult) -> str:
    if not result.ok:
        return f"<p>{html.escape(result.fallback_message or '')}</p>"

    rows = []
    for official in result.officials:
        party = html.escape(official.party or "")
        website = ""
        if official.urls:
            url = html.escape(official.urls[0], quote=True)
            website = f'<a href="{url}">{url}</a>'
        rows.append(f"<tr><td>{html.escape(official.name)}</td><td>{party}</td><td>{website}</td></tr>")
    return "<table>\n" + "\n".join(rows) + "\n</table>"


def letter_context(record: EnrichedRecord) -> dict[str, str]:
    return {
        "id": html.escape(str(record.id)),
        "name": html.escape(record.name),
        "last_name": html.escape(record.attendee.last_name or ""),
        "email": html.escape(record.attendee.email or ""),
        "zipcode": record.zipcode,
        "phone": html.escape(record.phone),
        "legislators": legislators_html(record.legislators),
    }


def letter_path(letters_dir: Path, record_id: str, name: str) -> Path:
    return letters_dir / f"thanks-{record_id}-{letter_slug(name)}.html"


class LetterRenderer:
    def __init__(self, template: str) -> None:
        self.template = Template(template)

    @classmethod
    def from_path(cls, path: Path) -> "LetterRenderer":
        return cls(read_text(path))

    def render(self, record: EnrichedRecord) -> str:
        return self.template.safe_substitute(letter_context(record))

    def __call__(self, record: EnrichedRecord) -> str:
        return self.render(record)


class LetterWriter:
    def __init__(self, letters_dir: Path) -> None:
        self.letters_dir = letters_dir

    def write(self, record: EnrichedRecord) -> Path:
        path = letter_path(self.letters_dir, record.id, record.name)
        text = record.letter or ""
        if not text.endswith("\n"):
            text += "\n"
        try:
            write_text(path, text)
        except OSError as exc:
            raise LetterWriteError(f"Could not write letter for attendee {record.id}: {exc}") from exc
        return path

    def __call__(self, record: EnrichedRecord) -> Path:
        return self.write(record)
