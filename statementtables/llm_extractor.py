"""Hosted language-model extraction.

An alternative implementation of the ``TransactionExtractor`` contract: the
statement text goes to an OpenAI-compatible chat-completions endpoint and the
returned JSON is converted into ``TransactionRecord`` objects.  It shares no
state with the heuristic engine and is never composed with it.
"""

import json
import logging
import os
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import requests

from .exceptions import ExtractionServiceError
from .models import TransactionRecord
from .transactions import TransactionExtractor, lines_from_source

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:1234/v1"
DEFAULT_MODEL = "meta-llama-3.1-8b-instruct"

SYSTEM_PROMPT = "You are a precise bank statement parser. Return only valid JSON."

PROMPT_TEMPLATE = """Extract every transaction from the bank statement text below.

Guidelines:
- Detect the transaction table even when columns are only separated by spaces.
- Normalise dates to YYYY-MM-DD.
- Amounts may use commas or dots; "CR"/"DR" markers mean credit/debit.
- Merge descriptions that wrap over several lines.
- Ignore headers, footers, totals and other text that is not a transaction.

Return a JSON object of the form
{{"transactions": [{{"date": "YYYY-MM-DD", "description": "...", "debit": 0.0, "credit": 0.0, "balance": 0.0}}]}}
leaving out debit, credit or balance when they do not apply.

BANK STATEMENT TEXT:
{text}
"""


class LLMTransactionExtractor(TransactionExtractor):
    """Extract transactions through a hosted chat-completions model."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 300,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or os.getenv("STATEMENT_TABLES_LLM_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.chat_url = f"{self.base_url}/chat/completions"
        self.model = model or os.getenv("STATEMENT_TABLES_LLM_MODEL") or DEFAULT_MODEL
        self.api_key = api_key or os.getenv("STATEMENT_TABLES_LLM_API_KEY")
        self.timeout = timeout
        self.session = session or requests.Session()

    def extract(self, source) -> List[TransactionRecord]:
        text = "\n".join(lines_from_source(source))
        if not text.strip():
            return []
        content = self._complete(PROMPT_TEMPLATE.format(text=text))
        items = parse_llm_response(content)
        records = [r for r in (record_from_item(item) for item in items) if r is not None]
        logger.info(f"LLM returned {len(items)} items, {len(records)} usable transactions")
        return records

    def _complete(self, prompt: str) -> str:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.1,
            "stream": False,
        }
        logger.info(f"Calling {self.chat_url} ({self.model}) to extract transactions")
        try:
            response = self.session.post(self.chat_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ExtractionServiceError(f"LLM request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise ExtractionServiceError(f"LLM request failed: {e}") from e

        if response.status_code != 200:
            raise ExtractionServiceError(f"LLM request failed with status {response.status_code}")

        try:
            return response.json()["choices"][0]["message"]["content"].strip()
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ExtractionServiceError("Unexpected chat-completions response shape") from e


def parse_llm_response(content: str) -> List[Dict[str, Any]]:
    """Pull the transaction list out of a model reply.

    Accepts a bare JSON array or an object with a ``transactions`` key,
    optionally wrapped in a markdown code fence.
    """
    logger.debug(f"LLM response (first 500 chars): {content[:500]}")
    if content.startswith("```"):
        content = re.sub(r"^```(?:json)?\n?", "", content)
        content = re.sub(r"\n?```$", "", content)

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        json_match = re.search(r"\[[\s\S]*\]", content)
        if not json_match:
            raise ExtractionServiceError("LLM response did not contain JSON")
        try:
            data = json.loads(json_match.group(0))
        except json.JSONDecodeError as e:
            raise ExtractionServiceError(f"Failed to parse LLM response as JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("transactions", [])
    if not isinstance(data, list):
        raise ExtractionServiceError("LLM response is not a transaction list")
    return [item for item in data if isinstance(item, dict)]


def record_from_item(item: Dict[str, Any]) -> Optional[TransactionRecord]:
    """Convert one returned item, or ``None`` when its date is unusable."""
    try:
        txn_date = date.fromisoformat(str(item.get("date", "")).strip())
    except ValueError:
        logger.debug(f"Skipping LLM item with bad date: {item!r}")
        return None
    return TransactionRecord(
        date=txn_date,
        description=re.sub(r"\s+", " ", str(item.get("description") or "")).strip(),
        debit=_amount(item.get("debit")),
        credit=_amount(item.get("credit")),
        balance=_amount(item.get("balance")),
    )


def _amount(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value).replace(",", ""))
    except InvalidOperation:
        return None
