"""
Remote Analysis Client.

Calls the external analysis service (POST /api/analyze) and validates its
response at the boundary, turning every payload into either a
RemoteAnalysisSuccess or a RemoteAnalysisFailure. Downstream code never has
to inspect the raw JSON shape again.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx

from .lifestyle import LifestyleAnswers

logger = logging.getLogger(__name__)

DEFAULT_HEALTH_DATABASES = ["NHANES", "WHO"]
DEFAULT_TIMEOUT = 30.0


@dataclass
class RemoteAnalysisSuccess:
    """Analysis payload that carried at least one raw prediction record."""

    predictions: List[Any]
    analysis: Dict[str, Any] = field(default_factory=dict)

    ok = True


@dataclass
class RemoteAnalysisFailure:
    """Analysis attempt that produced nothing usable."""

    error: str

    ok = False


RemoteAnalysisResult = Union[RemoteAnalysisSuccess, RemoteAnalysisFailure]


def _prediction_list(container: Any) -> List[Any]:
    if not isinstance(container, Mapping):
        return []
    projection = container.get("projection")
    if isinstance(projection, Mapping):
        nested = projection.get("predictions")
        if isinstance(nested, list) and nested:
            return nested
    predictions = container.get("predictions")
    if isinstance(predictions, list) and predictions:
        return predictions
    return []


def parse_analysis_response(payload: Any) -> RemoteAnalysisResult:
    """
    Validate an analysis service response.

    Raw predictions are looked up in order at analysis.projection.predictions,
    analysis.predictions, projection.predictions and predictions; the first
    non-empty list wins.

    Args:
        payload: Decoded JSON body, or an already parsed result

    Returns:
        RemoteAnalysisSuccess when predictions were found, otherwise
        RemoteAnalysisFailure with a reason
    """
    if isinstance(payload, (RemoteAnalysisSuccess, RemoteAnalysisFailure)):
        return payload
    if not payload:
        return RemoteAnalysisFailure(error="Empty response from analysis service")
    if not isinstance(payload, Mapping):
        return RemoteAnalysisFailure(
            error=f"Unexpected response type: {type(payload).__name__}"
        )
    if not payload.get("ok"):
        return RemoteAnalysisFailure(error=str(payload.get("error") or "analyze failed"))

    analysis = payload.get("analysis")
    if not isinstance(analysis, Mapping):
        analysis = {}

    predictions = _prediction_list(analysis) or _prediction_list(payload)
    if not predictions:
        return RemoteAnalysisFailure(error="Analysis returned no predictions")

    return RemoteAnalysisSuccess(predictions=predictions, analysis=dict(analysis))


class AnalysisClient:
    """
    Async client for the external analysis service.

    Instances are callable with (user_id, lifestyle), so they can be passed
    straight to the resolver as its remote call. A single request is made
    per call; failures are returned, not raised.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        health_databases: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Root URL of the analysis backend
            token: Optional bearer token sent as Authorization header
            timeout: Request timeout in seconds
            health_databases: Reference datasets requested for the analysis
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.health_databases = list(health_databases or DEFAULT_HEALTH_DATABASES)
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def build_request_body(self, user_id: str, lifestyle: LifestyleAnswers) -> dict:
        return {
            "userId": user_id,
            "lifestyle": lifestyle.to_dict(),
            "healthDatabases": list(self.health_databases),
        }

    async def analyze(self, user_id: str, lifestyle: LifestyleAnswers) -> RemoteAnalysisResult:
        """
        Request an analysis for one user.

        Args:
            user_id: Identifier the backend keys the analysis by
            lifestyle: Completed lifestyle answers

        Returns:
            RemoteAnalysisSuccess or RemoteAnalysisFailure
        """
        url = f"{self.base_url}/api/analyze"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.post(
                    url,
                    json=self.build_request_body(user_id, lifestyle),
                    headers=self._headers(),
                )
        except httpx.TimeoutException:
            logger.warning(f"[ANALYSIS] Request to {url} timed out after {self.timeout}s")
            return RemoteAnalysisFailure(error="Analysis service timed out")
        except httpx.HTTPError as e:
            logger.warning(f"[ANALYSIS] Cannot reach analysis service at {url}: {e}")
            return RemoteAnalysisFailure(error=f"Cannot reach analysis service: {e}")

        try:
            payload = response.json()
        except ValueError:
            logger.warning(
                f"[ANALYSIS] Non-JSON response (status {response.status_code}) from {url}"
            )
            return RemoteAnalysisFailure(
                error=f"Analysis service returned status {response.status_code}"
            )

        if not response.is_success:
            detail = payload.get("error") if isinstance(payload, Mapping) else None
            logger.warning(
                f"[ANALYSIS] Analysis service returned status {response.status_code}: {detail}"
            )
            return RemoteAnalysisFailure(
                error=detail or f"Analysis service returned status {response.status_code}"
            )

        result = parse_analysis_response(payload)
        if isinstance(result, RemoteAnalysisFailure):
            logger.warning(f"[ANALYSIS] Unusable analysis for {user_id}: {result.error}")
        else:
            logger.info(
                f"[ANALYSIS] Received {len(result.predictions)} predictions for {user_id}"
            )
        return result

    async def __call__(self, user_id: str, lifestyle: LifestyleAnswers) -> RemoteAnalysisResult:
        return await self.analyze(user_id, lifestyle)
