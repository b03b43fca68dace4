"""
Risk Projection Resolver.

Turns lifestyle answers and a health snapshot into an ordered list of
condition projections. The remote analysis service is tried once; any
failure, timeout or empty result falls back to the local heuristic, so a
caller always gets a usable, non-empty list.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from .analysis_client import (
    DEFAULT_TIMEOUT,
    RemoteAnalysisFailure,
    parse_analysis_response,
)
from .fallback import generate_fallback_predictions
from .lifestyle import LifestyleAnswers
from .predictions import PredictionTimeline, normalize_predictions, sort_by_years

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_FALLBACK = "fallback"

FALLBACK_WARNING = "Analysis service unavailable. Showing local personalized estimates."

RemoteCall = Callable[[str, LifestyleAnswers], Awaitable[Any]]


@dataclass
class ProjectionOutcome:
    """Predictions together with where they came from."""

    predictions: List[PredictionTimeline]
    source: str
    warning: Optional[str] = None
    analysis: Dict[str, Any] = field(default_factory=dict)

    @property
    def used_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "predictions": [p.to_dict() for p in self.predictions],
            "source": self.source,
            "warning": self.warning,
            "analysis": self.analysis,
        }


class RiskProjectionResolver:
    """
    Resolves projections from a remote model with a local fallback.

    Holds no state between calls; one instance can serve any number of
    independent resolutions.

    Configuration:
        timeout: Seconds to wait for the remote call before falling back
            (None waits indefinitely)
    """

    def __init__(self, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.timeout = timeout

    async def resolve(
        self,
        lifestyle: LifestyleAnswers,
        health_snapshot: Optional[Mapping[str, Any]],
        remote_call: Optional[RemoteCall],
        user_id: str = "guest",
    ) -> List[PredictionTimeline]:
        """Resolve projections and return only the sorted prediction list."""
        outcome = await self.resolve_detailed(lifestyle, health_snapshot, remote_call, user_id)
        return outcome.predictions

    async def resolve_detailed(
        self,
        lifestyle: LifestyleAnswers,
        health_snapshot: Optional[Mapping[str, Any]],
        remote_call: Optional[RemoteCall],
        user_id: str = "guest",
    ) -> ProjectionOutcome:
        """
        Resolve projections, reporting the source used.

        Args:
            lifestyle: Completed lifestyle answers (validated by the caller)
            health_snapshot: Prior health record, possibly partial
            remote_call: Async callable (user_id, lifestyle) for the analysis
                service; None skips straight to the fallback
            user_id: Identifier passed through to the remote call

        Returns:
            ProjectionOutcome with a non-empty, years-ascending list
        """
        if remote_call is None:
            return self._fallback(lifestyle, health_snapshot, warning=None)

        try:
            payload = await asyncio.wait_for(remote_call(user_id, lifestyle), self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"[RESOLVER] Remote analysis timed out after {self.timeout}s, using fallback"
            )
            return self._fallback(lifestyle, health_snapshot)
        except Exception as e:
            logger.warning(f"[RESOLVER] Remote analysis failed, using fallback: {e}")
            return self._fallback(lifestyle, health_snapshot)

        try:
            result = parse_analysis_response(payload)
            predictions = normalize_predictions(result.predictions) if result.ok else []
        except Exception as e:
            logger.warning(f"[RESOLVER] Could not read remote predictions, using fallback: {e}")
            return self._fallback(lifestyle, health_snapshot)

        if isinstance(result, RemoteAnalysisFailure):
            logger.warning(f"[RESOLVER] Remote analysis unusable, using fallback: {result.error}")
            return self._fallback(lifestyle, health_snapshot)

        if not predictions:
            logger.warning("[RESOLVER] No usable remote predictions, using fallback")
            return self._fallback(lifestyle, health_snapshot, analysis=result.analysis)

        logger.info(f"[RESOLVER] Using {len(predictions)} remote predictions for {user_id}")
        return ProjectionOutcome(
            predictions=sort_by_years(predictions),
            source=SOURCE_REMOTE,
            analysis=result.analysis,
        )

    def _fallback(
        self,
        lifestyle: LifestyleAnswers,
        health_snapshot: Optional[Mapping[str, Any]],
        warning: Optional[str] = FALLBACK_WARNING,
        analysis: Optional[Dict[str, Any]] = None,
    ) -> ProjectionOutcome:
        return ProjectionOutcome(
            predictions=generate_fallback_predictions(lifestyle, health_snapshot),
            source=SOURCE_FALLBACK,
            warning=warning,
            analysis=dict(analysis or {}),
        )


async def resolve(
    lifestyle: LifestyleAnswers,
    health_snapshot: Optional[Mapping[str, Any]],
    remote_call: Optional[RemoteCall],
    user_id: str = "guest",
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> List[PredictionTimeline]:
    """Convenience wrapper around RiskProjectionResolver.resolve."""
    resolver = RiskProjectionResolver(timeout=timeout)
    return await resolver.resolve(lifestyle, health_snapshot, remote_call, user_id)
