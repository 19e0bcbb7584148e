"""In-memory Wave gateway for exercising the connector without network calls."""

import json
import logging
import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from .transport import HttpxTransport

logger = logging.getLogger(__name__)

BUSINESS_TYPES = ("fintech", "other")


class SimulatorScenario(str, Enum):
    """Predefined gateway behaviours."""
    SUCCESS = "success"
    INVALID_LAUNCH_URL = "invalid_launch_url"
    SERVER_ERROR = "server_error"
    UNPARSEABLE_ERROR = "unparseable_error"
    RATE_LIMIT = "rate_limit"


@dataclass
class SimulatorConfig:
    """Configuration for simulator behavior."""
    api_key: Optional[str] = None  # when set, requests must carry it as a bearer token
    scenario: SimulatorScenario = SimulatorScenario.SUCCESS
    launch_url_base: str = "https://pay.wave.com/c/"
    seed: Optional[int] = None


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: Optional[Dict[str, Any]] = None
    params: Dict[str, str] = field(default_factory=dict)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _error(status_code: int, code: str, message: str, details: Optional[List[str]] = None) -> httpx.Response:
    body: Dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = [{"loc": ["body"], "msg": msg} for msg in details]
    return httpx.Response(status_code, json=body)


class WaveSimulator:
    """
    Simulated Wave API, usable as an ``httpx.MockTransport`` handler.

    Features:
    - In-memory checkout sessions, transactions, refunds and aggregated merchants
    - Scenario switch for gateway-wide failures
    - One-shot queued responses for targeted failures (``fail_next``)
    - Request log for asserting on what the connector sent
    """

    def __init__(self, config: Optional[SimulatorConfig] = None):
        self.config = config or SimulatorConfig()
        self._rng = random.Random(self.config.seed)
        self.sessions: Dict[str, Dict[str, Any]] = {}
        self.transactions: Dict[str, Dict[str, Any]] = {}
        self.refunds: Dict[str, Dict[str, Any]] = {}
        self.merchants: Dict[str, Dict[str, Any]] = {}
        self.requests: List[RecordedRequest] = []
        self._queued: List[httpx.Response] = []
        self._routes: List[Tuple[str, "re.Pattern[str]", Callable[..., httpx.Response]]] = [
            ("POST", re.compile(r"^/checkout/sessions$"), self._create_session),
            ("GET", re.compile(r"^/checkout/sessions/(?P<session_id>[^/]+)$"), self._get_session),
            ("POST", re.compile(r"^/v1/transactions/(?P<txn_id>[^/]+)/cancel$"), self._cancel_transaction),
            ("POST", re.compile(r"^/v1/transactions/(?P<txn_id>[^/]+)/refunds$"), self._create_refund),
            ("GET", re.compile(r"^/v1/refunds/(?P<refund_id>[^/]+)$"), self._get_refund),
            ("POST", re.compile(r"^/v1/aggregated_merchants$"), self._create_merchant),
            ("GET", re.compile(r"^/v1/aggregated_merchants$"), self._list_merchants),
            ("GET", re.compile(r"^/v1/aggregated_merchants/(?P<merchant_id>[^/]+)$"), self._get_merchant),
            ("PATCH", re.compile(r"^/v1/aggregated_merchants/(?P<merchant_id>[^/]+)$"), self._update_merchant),
            ("DELETE", re.compile(r"^/v1/aggregated_merchants/(?P<merchant_id>[^/]+)$"), self._delete_merchant),
        ]
        logger.info("WaveSimulator initialized")

    @property
    def request_count(self) -> int:
        return len(self.requests)

    def transport(self) -> HttpxTransport:
        """Connector transport routed to this simulator."""
        return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(self)))

    def fail_next(self, status_code: int, body: Any = None, count: int = 1) -> None:
        """Answer the next ``count`` requests with the given status and body."""
        for _ in range(count):
            if isinstance(body, (dict, list)):
                self._queued.append(httpx.Response(status_code, json=body))
            else:
                self._queued.append(httpx.Response(status_code, content=(body or "").encode("utf-8")))

    def _generate_id(self, prefix: str) -> str:
        return f"{prefix}{self._rng.getrandbits(48):012x}"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body: Optional[Dict[str, Any]] = None
        if request.content:
            try:
                body = json.loads(request.content)
            except json.JSONDecodeError:
                body = None
        path = request.url.path
        self.requests.append(
            RecordedRequest(
                method=request.method, path=path, body=body, params=dict(request.url.params)
            )
        )

        if self.config.api_key is not None:
            if request.headers.get("authorization") != f"Bearer {self.config.api_key}":
                return _error(401, "UNAUTHORIZED", "Invalid API key")
        if self._queued:
            return self._queued.pop(0)

        scenario = self.config.scenario
        if scenario == SimulatorScenario.SERVER_ERROR:
            return _error(500, "INTERNAL_ERROR", "Simulated server error")
        if scenario == SimulatorScenario.UNPARSEABLE_ERROR:
            return httpx.Response(502, content=b"<html>Bad Gateway</html>")
        if scenario == SimulatorScenario.RATE_LIMIT:
            return _error(429, "RATE_LIMITED", "Too many requests")

        for method, pattern, handler in self._routes:
            match = pattern.match(path)
            if match and method == request.method:
                return handler(body or {}, dict(request.url.params), **match.groupdict())
        return _error(404, "NOT_FOUND", f"No route for {request.method} {path}")

    # Checkout sessions and transactions
    def _create_session(self, body: Dict[str, Any], params: Dict[str, str]) -> httpx.Response:
        missing = [f for f in ("amount", "currency", "error_url", "success_url", "reference") if f not in body]
        if missing:
            return _error(400, "REQUEST_VALIDATION_ERROR", "Invalid request", [f"{f} is required" for f in missing])
        merchant_id = body.get("aggregated_merchant_id")
        if merchant_id and merchant_id not in self.merchants:
            return _error(404, "AGGREGATED_MERCHANT_NOT_FOUND", f"No aggregated merchant {merchant_id}")

        session_id = self._generate_id("cos-")
        launch_url = f"{self.config.launch_url_base}{session_id}"
        if self.config.scenario == SimulatorScenario.INVALID_LAUNCH_URL:
            launch_url = "not a url"
        session = {
            "id": session_id,
            "status": "created",
            "launch_url": launch_url,
            "reference": body["reference"],
            "amount": body["amount"],
            "currency": body["currency"],
            "aggregated_merchant_id": merchant_id,
            "when_created": _now(),
        }
        self.sessions[session_id] = session
        return httpx.Response(200, json=session)

    def _get_session(self, body: Dict[str, Any], params: Dict[str, str], session_id: str) -> httpx.Response:
        session = self.sessions.get(session_id)
        if not session:
            return _error(404, "CHECKOUT_SESSION_NOT_FOUND", f"No checkout session {session_id}")
        return httpx.Response(200, json=session)

    def complete_session(self, session_id: str, success: bool = True) -> Optional[str]:
        """Settle a session as the payer would (simulator-specific). Returns the transaction id."""
        session = self.sessions[session_id]
        if not success:
            session["status"] = "failed"
            return None
        txn_id = self._generate_id("T_")
        session["status"] = "completed"
        session["transaction_id"] = txn_id
        self.transactions[txn_id] = {
            "id": txn_id,
            "status": "completed",
            "reference": session["reference"],
            "amount": int(session["amount"]),
            "refunded_amount": 0,
        }
        return txn_id

    def _cancel_transaction(self, body: Dict[str, Any], params: Dict[str, str], txn_id: str) -> httpx.Response:
        txn = self.transactions.get(txn_id)
        if not txn:
            return _error(404, "TRANSACTION_NOT_FOUND", f"No transaction {txn_id}")
        if txn["status"] == "cancelled":
            return _error(400, "TRANSACTION_ALREADY_CANCELLED", "Transaction is already cancelled")
        txn["status"] = "cancelled"
        txn["cancel_reason"] = body.get("reason")
        return httpx.Response(200, json={"id": txn_id, "status": "cancelled", "reference": txn["reference"]})

    def _create_refund(self, body: Dict[str, Any], params: Dict[str, str], txn_id: str) -> httpx.Response:
        txn = self.transactions.get(txn_id)
        if not txn:
            return _error(404, "TRANSACTION_NOT_FOUND", f"No transaction {txn_id}")
        try:
            amount = int(body.get("amount", ""))
        except (TypeError, ValueError):
            return _error(400, "REQUEST_VALIDATION_ERROR", "Invalid request", ["amount must be an integer string"])
        if amount > txn["amount"] - txn["refunded_amount"]:
            return _error(400, "REFUND_AMOUNT_EXCEEDED", "Refund exceeds the remaining amount")
        txn["refunded_amount"] += amount
        refund_id = self._generate_id("rf-")
        refund = {
            "id": refund_id,
            "status": "processing",
            "amount": str(amount),
            "transaction_id": txn_id,
            "reason": body.get("reason"),
        }
        self.refunds[refund_id] = refund
        return httpx.Response(200, json=refund)

    def _get_refund(self, body: Dict[str, Any], params: Dict[str, str], refund_id: str) -> httpx.Response:
        refund = self.refunds.get(refund_id)
        if not refund:
            return _error(404, "REFUND_NOT_FOUND", f"No refund {refund_id}")
        return httpx.Response(200, json=refund)

    def settle_refund(self, refund_id: str, status: str = "completed") -> None:
        """Move a refund to a final status (simulator-specific)."""
        self.refunds[refund_id]["status"] = status

    # Aggregated merchants
    def _create_merchant(self, body: Dict[str, Any], params: Dict[str, str]) -> httpx.Response:
        if body.get("business_type") not in BUSINESS_TYPES:
            return _error(400, "INVALID_BUSINESS_TYPE", f"Unknown business type {body.get('business_type')}")
        if not body.get("name") or not body.get("business_description"):
            return _error(400, "REQUEST_VALIDATION_ERROR", "Invalid request", ["name and business_description are required"])
        merchant_id = self._generate_id("am-")
        now = _now()
        merchant = {**body, "id": merchant_id, "status": "active", "created_at": now, "updated_at": now}
        self.merchants[merchant_id] = merchant
        return httpx.Response(200, json=merchant)

    def _get_merchant(self, body: Dict[str, Any], params: Dict[str, str], merchant_id: str) -> httpx.Response:
        merchant = self.merchants.get(merchant_id)
        if not merchant:
            return _error(404, "AGGREGATED_MERCHANT_NOT_FOUND", f"No aggregated merchant {merchant_id}")
        return httpx.Response(200, json=merchant)

    def _update_merchant(self, body: Dict[str, Any], params: Dict[str, str], merchant_id: str) -> httpx.Response:
        merchant = self.merchants.get(merchant_id)
        if not merchant:
            return _error(404, "AGGREGATED_MERCHANT_NOT_FOUND", f"No aggregated merchant {merchant_id}")
        if "business_type" in body and body["business_type"] not in BUSINESS_TYPES:
            return _error(400, "INVALID_BUSINESS_TYPE", f"Unknown business type {body['business_type']}")
        merchant.update(body)
        merchant["updated_at"] = _now()
        return httpx.Response(200, json=merchant)

    def _delete_merchant(self, body: Dict[str, Any], params: Dict[str, str], merchant_id: str) -> httpx.Response:
        if self.merchants.pop(merchant_id, None) is None:
            return _error(404, "AGGREGATED_MERCHANT_NOT_FOUND", f"No aggregated merchant {merchant_id}")
        return httpx.Response(204)

    def _list_merchants(self, body: Dict[str, Any], params: Dict[str, str]) -> httpx.Response:
        ids = list(self.merchants)
        start = ids.index(params["cursor"]) + 1 if params.get("cursor") in self.merchants else 0
        limit = int(params.get("limit", 20))
        page = ids[start:start + limit]
        has_next = start + limit < len(ids)
        return httpx.Response(
            200,
            json={
                "items": [self.merchants[m] for m in page],
                "page_info": {"has_next_page": has_next, "end_cursor": page[-1] if page else None},
            },
        )

    def clear(self) -> None:
        """Reset all stored state (for test cleanup)."""
        self.sessions.clear()
        self.transactions.clear()
        self.refunds.clear()
        self.merchants.clear()
        self.requests.clear()
        self._queued.clear()
