"""Waitlist and contact-form submissions stored as JSON arrays with CSV mirrors."""

import asyncio
import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Generic, List, Optional, Type, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..domain.errors import DuplicateEmailError, InvalidRequestError
from ..domain.models import CamelModel, ContactEntry, WaitlistEntry, utcnow
from . import templates
from .email import Mailer

logger = structlog.get_logger()

DEFAULT_WAITLIST_NAME = "Future Nyx User"
RECENT_SIGNUPS = 5

T = TypeVar("T", bound=CamelModel)


class JsonLog(Generic[T]):
    """A JSON array file rewritten whole on every append, plus a CSV mirror.

    There is no locking: two concurrent appends both read the old array and
    the later write wins, dropping the other record.
    """

    def __init__(self, json_path: Path, csv_path: Path, model: Type[T]):
        self.json_path = json_path
        self.csv_path = csv_path
        self.model = model

    def _read(self) -> List[T]:
        try:
            raw = json.loads(self.json_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            logger.error("submission_file_unreadable", path=str(self.json_path), error=str(e))
            return []
        if not isinstance(raw, list):
            logger.error("submission_file_malformed", path=str(self.json_path))
            return []

        records = []
        for item in raw:
            try:
                records.append(self.model.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("submission_record_skipped", path=str(self.json_path), error=str(e))
        return records

    def _write(self, records: List[T]) -> None:
        self.json_path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.model_dump(mode="json", by_alias=True) for r in records]
        self.json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def _append_csv(self, row: List[str]) -> None:
        try:
            with self.csv_path.open("a", newline="", encoding="utf-8") as fh:
                csv.writer(fh).writerow(row)
        except OSError as e:
            logger.error("csv_append_failed", path=str(self.csv_path), error=str(e))

    async def read(self) -> List[T]:
        return await asyncio.to_thread(self._read)

    async def write(self, records: List[T], csv_row: List[str]) -> None:
        await asyncio.to_thread(self._write, records)
        await asyncio.to_thread(self._append_csv, csv_row)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _fmt(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


class SubmissionStore:
    """Persists waitlist signups and contact messages and sends notifications."""

    def __init__(self, data_dir: str, mailer: Mailer, operator_email: str = ""):
        root = Path(data_dir)
        self.waitlist = JsonLog(root / "waitlist.json", root / "waitlist.csv", WaitlistEntry)
        self.contacts = JsonLog(root / "contacts.json", root / "contacts.csv", ContactEntry)
        self.mailer = mailer
        self.operator_email = operator_email

    async def add_waitlist_entry(self, email: Optional[str], name: Optional[str] = None) -> WaitlistEntry:
        email = _clean(email)
        if not email or "@" not in email:
            raise InvalidRequestError("Valid email required")

        users = await self.waitlist.read()
        if any(user.email == email for user in users):
            logger.info("waitlist_duplicate", email=email)
            raise DuplicateEmailError(email)

        entry = WaitlistEntry(email=email, name=_clean(name) or DEFAULT_WAITLIST_NAME)
        users.append(entry)
        await self.waitlist.write(users, [entry.joined_at.isoformat(), entry.email, entry.name])
        logger.info("waitlist_joined", email=email, total=len(users))

        self.mailer.dispatch(
            entry.email,
            "Welcome to Nyx AI Waitlist!",
            templates.render(
                templates.WAITLIST_WELCOME, name=entry.name, position=len(users), total=len(users)
            ),
        )
        if self.operator_email:
            self.mailer.dispatch(
                self.operator_email,
                "NEW WAITLIST SIGNUP!",
                templates.render(
                    templates.WAITLIST_NOTIFICATION,
                    entry=entry,
                    total=len(users),
                    recent=list(reversed(users[-RECENT_SIGNUPS:])),
                ),
            )
        return entry

    async def add_contact_entry(
        self,
        name: Optional[str],
        email: Optional[str],
        message: Optional[str],
        phone: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> ContactEntry:
        name, email, message = _clean(name), _clean(email), _clean(message)
        if not name or not email or not message:
            raise InvalidRequestError("Name, email, and message are required")

        entry = ContactEntry(
            name=name,
            email=email,
            message=message,
            phone=_clean(phone) or None,
            subject=_clean(subject) or None,
        )
        contacts = await self.contacts.read()
        contacts.append(entry)
        await self.contacts.write(
            contacts,
            [entry.submitted_at.isoformat(), entry.email, entry.name, entry.subject or ""],
        )
        logger.info("contact_received", email=email, total=len(contacts))

        self.mailer.dispatch(
            entry.email,
            "We received your message - Nyx AI",
            templates.render(templates.CONTACT_CONFIRMATION, entry=entry),
        )
        if self.operator_email:
            self.mailer.dispatch(
                self.operator_email,
                f"NEW CONTACT MESSAGE: {entry.subject or entry.name}",
                templates.render(templates.CONTACT_NOTIFICATION, entry=entry),
            )
        return entry

    async def list_waitlist(self) -> List[WaitlistEntry]:
        return await self.waitlist.read()

    async def list_contacts(self) -> List[ContactEntry]:
        return await self.contacts.read()

    async def render_waitlist(self) -> str:
        users = await self.list_waitlist()
        named = [u for u in users if u.name != DEFAULT_WAITLIST_NAME]
        return templates.render(
            templates.DASHBOARD,
            title="Waitlist Dashboard",
            stats=[
                ("Total Signups", len(users)),
                ("With Names", len(named)),
                ("Last Updated", utcnow().strftime("%Y-%m-%d")),
            ],
            columns=["Date", "Email", "Name"],
            rows=[[_fmt(u.joined_at), u.email, u.name] for u in users],
            export_name="nyx-waitlist.csv",
        )

    async def render_contacts(self) -> str:
        contacts = await self.list_contacts()
        return templates.render(
            templates.DASHBOARD,
            title="Contact Messages",
            stats=[
                ("Total Messages", len(contacts)),
                ("Unique Senders", len({c.email for c in contacts})),
                ("Last Updated", utcnow().strftime("%Y-%m-%d")),
            ],
            columns=["Date", "Name", "Email", "Phone", "Subject", "Message"],
            rows=[
                [_fmt(c.submitted_at), c.name, c.email, c.phone or "", c.subject or "", c.message]
                for c in contacts
            ],
            export_name="nyx-contacts.csv",
        )
