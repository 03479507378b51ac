"""Gong REST API client — users, recent calls, and call transcripts.

Authenticates with HTTP basic auth (access key : access key secret) and
reshapes Gong's JSON into the smaller models the frontend consumes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from transcript_analyzer.config import Settings
from transcript_analyzer.models import (
    CallsResponse,
    CallSummary,
    PartySummary,
    TranscriptResponse,
    UserSummary,
)

logger = logging.getLogger(__name__)


class GongNotConfiguredError(Exception):
    """Access key or secret missing."""


class GongAPIError(Exception):
    """Gong answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, details: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


# ---------------------------------------------------------------------------
# Raw Gong payloads (only the fields we read)
# ---------------------------------------------------------------------------

class _GongModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class GongUser(_GongModel):
    id: str
    email_address: str = ""
    first_name: str = ""
    last_name: str = ""
    active: bool = False


class GongParty(_GongModel):
    id: str | None = None
    email_address: str | None = None
    name: str | None = None
    affiliation: str | None = None


class GongCallMetaData(_GongModel):
    id: str
    title: str = ""
    started: str
    duration: float = 0
    url: str | None = None


class GongCall(_GongModel):
    meta_data: GongCallMetaData
    parties: list[GongParty] = Field(default_factory=list)


class GongRecords(_GongModel):
    total_records: int = 0


class GongCallsPage(_GongModel):
    calls: list[GongCall] = Field(default_factory=list)
    records: GongRecords = Field(default_factory=GongRecords)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _parse_datetime(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _format_offset(seconds: float) -> str:
    """Sentence start offset in seconds as HH:MM:SS, wrapping at 24 hours."""
    total = int(seconds) % 86400
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _format_started(value: str) -> str:
    dt = _parse_datetime(value)
    hour = dt.hour % 12 or 12
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt:%M:%S %p}"


def format_transcript(call: dict[str, Any] | None, transcript: dict[str, Any]) -> str:
    """Render a Gong transcript as speaker-labelled, timestamped text."""
    lines: list[str] = []
    speakers: dict[str, str] = {}

    if call:
        meta = call.get("metaData", {})
        minutes = int(meta.get("duration", 0) / 60 + 0.5)
        lines.append(f"Call: {meta.get('title', '')}")
        lines.append(f"Date: {_format_started(meta['started'])}")
        lines.append(f"Duration: {minutes} minutes")
        lines.append("")
        lines.append("--- TRANSCRIPT ---")
        lines.append("")
        for party in call.get("parties") or []:
            speakers[party["id"]] = (
                party.get("name") or party.get("emailAddress") or "Unknown Speaker"
            )

    for segment in transcript.get("transcript") or []:
        speaker_id = segment.get("speakerId", "")
        speaker = speakers.get(speaker_id) or f"Speaker {speaker_id}"
        for sentence in segment.get("sentences") or []:
            lines.append(
                f"[{_format_offset(sentence.get('start', 0))}] {speaker}: {sentence.get('text', '')}"
            )
        lines.append("")

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def summarize_call(call: GongCall) -> CallSummary:
    meta = call.meta_data
    return CallSummary(
        id=meta.id,
        title=meta.title,
        date=_parse_datetime(meta.started).astimezone(timezone.utc).date().isoformat(),
        duration=meta.duration,
        url=meta.url,
        started=meta.started,
        parties=[
            PartySummary(
                name=party.name,
                email=party.email_address,
                affiliation=party.affiliation,
            )
            for party in call.parties
        ],
    )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GongClient:
    """One short-lived httpx.AsyncClient per operation."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.settings.gong_configured:
            raise GongNotConfiguredError(
                "GONG_ACCESS_KEY and GONG_ACCESS_KEY_SECRET are required"
            )
        return httpx.AsyncClient(
            base_url=self.settings.gong_api_base_url,
            auth=(self.settings.gong_access_key, self.settings.gong_access_key_secret),
            headers={"Content-Type": "application/json"},
            timeout=self.settings.gong_timeout_seconds,
            transport=self._transport,
        )

    @staticmethod
    def _check(response: httpx.Response, message: str, **context: Any) -> None:
        if response.is_success:
            return
        logger.error(
            "%s (status=%s, context=%s): %s",
            message,
            response.status_code,
            context,
            response.text,
        )
        raise GongAPIError(message, response.status_code, response.text)

    async def list_active_users(self) -> list[UserSummary]:
        logger.info("Fetching Gong users")
        async with self._client() as client:
            response = await client.get("/users")
        self._check(response, "Failed to fetch users from Gong API")

        users = [GongUser.model_validate(u) for u in response.json().get("users", [])]
        active = [
            UserSummary(
                id=user.id,
                name=f"{user.first_name} {user.last_name}",
                email=user.email_address,
            )
            for user in users
            if user.active
        ]
        logger.info(
            "Fetched Gong users (total=%d, active=%d)", len(users), len(active)
        )
        return active

    async def list_recent_calls(self, user_id: str, limit: int = 10) -> CallsResponse:
        """Calls hosted by `user_id` within the configured window, newest window first."""
        to_date = datetime.now(timezone.utc)
        from_date = to_date - timedelta(days=self.settings.gong_calls_window_days)
        body = {
            "filter": {
                "fromDateTime": from_date.isoformat(),
                "toDateTime": to_date.isoformat(),
                "primaryUsers": [user_id],
            },
            "contentSelector": {
                "exposedFields": {
                    "parties": True,
                    "content": {"topics": True},
                },
            },
        }

        logger.info("Fetching Gong calls (user_id=%s, limit=%d)", user_id, limit)
        async with self._client() as client:
            response = await client.post("/calls/extensive", json=body)
        self._check(response, "Failed to fetch calls from Gong API", user_id=user_id)

        page = GongCallsPage.model_validate(response.json())
        calls = [summarize_call(call) for call in page.calls[:limit]]
        logger.info(
            "Fetched Gong calls (user_id=%s, count=%d, total=%d)",
            user_id,
            len(calls),
            page.records.total_records,
        )
        return CallsResponse(calls=calls, total=page.records.total_records)

    async def get_transcript(self, call_id: str) -> TranscriptResponse:
        logger.info("Fetching Gong transcript (call_id=%s)", call_id)
        async with self._client() as client:
            call_response = await client.get(
                "/calls/extensive", params={"callIds": call_id}
            )
            self._check(
                call_response,
                "Failed to fetch call details from Gong API",
                call_id=call_id,
            )

            transcript_response = await client.get(
                "/calls/transcript", params={"callId": call_id}
            )
            self._check(
                transcript_response,
                "Failed to fetch transcript from Gong API",
                call_id=call_id,
            )

        calls = call_response.json().get("calls") or []
        call = calls[0] if calls else None
        raw = transcript_response.json()
        text = format_transcript(call, raw)

        logger.info(
            "Fetched Gong transcript (call_id=%s, length=%d, segments=%d)",
            call_id,
            len(text),
            len(raw.get("transcript") or []),
        )
        return TranscriptResponse(
            call_id=call_id,
            transcript=text,
            raw_transcript=raw,
            call_details=call,
        )
