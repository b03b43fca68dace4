"""
Pytest fixtures for Risk Projection tests.
"""
import sys
import copy
import pytest
from pathlib import Path
from dotenv import load_dotenv

# Ensure the repo root and src/ are on sys.path so tests can import
# server.projection_api and risk_projection without an install.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from risk_projection import LifestyleAnswers  # noqa: E402


# ============================================================================
# Health Snapshot Fixtures
# ============================================================================

HEALTH_SNAPSHOTS = {
    "high_diabetes": {
        "profile": {
            "healthIdNumber": "14-1234-5678-9012",
            "healthId": "john.doe@sbx",
            "name": "John Doe",
        },
        "riskFactors": {
            "diabetes": {"risk": "High", "score": 75, "trend": "increasing"},
            "hypertension": {"risk": "Medium", "score": 60, "trend": "stable"},
            "cardiovascular": {"risk": "Medium", "score": 55, "trend": "increasing"},
        },
    },
    "low_diabetes": {
        "profile": {
            "healthIdNumber": "91-2345-6789-0123",
            "name": "Priya Sharma",
        },
        "riskFactors": {
            "diabetes": {"risk": "Low", "score": 25, "trend": "stable"},
            "anemia": {"risk": "High", "score": 70, "trend": "improving"},
        },
    },
    "no_risk_factors": {
        "profile": {"name": "Raj Patel"},
    },
}


@pytest.fixture
def health_snapshots():
    """Return copies of all sample health snapshots."""
    return copy.deepcopy(HEALTH_SNAPSHOTS)


@pytest.fixture
def high_risk_snapshot():
    """Snapshot seeded with a diabetes score of 75."""
    return copy.deepcopy(HEALTH_SNAPSHOTS["high_diabetes"])


@pytest.fixture
def baseline_snapshot():
    """Snapshot seeded with the default diabetes score of 50."""
    return {"riskFactors": {"diabetes": {"risk": "Medium", "score": 50}}}


# ============================================================================
# Lifestyle Fixtures
# ============================================================================

@pytest.fixture
def unhealthy_lifestyle():
    """No exercise, average diet, high stress: every factor above 1."""
    return LifestyleAnswers(
        exercise="none",
        diet="average",
        sleep="5-6",
        stress="high",
        smoking="occasional",
        alcohol="regular",
        water_intake="less1L",
        screen_time="more8",
    )


@pytest.fixture
def healthy_lifestyle():
    """Daily exercise, excellent diet, low stress: every factor below 1."""
    return LifestyleAnswers(
        exercise="daily",
        diet="excellent",
        sleep="7-8",
        stress="low",
        smoking="never",
        alcohol="none",
        water_intake="2-3L",
        screen_time="less2",
    )


@pytest.fixture
def lifestyle_payload():
    """Complete lifestyle answers in the camelCase wire shape."""
    return {
        "exercise": "none",
        "diet": "average",
        "sleep": "5-6",
        "stress": "high",
        "smoking": "occasional",
        "alcohol": "regular",
        "waterIntake": "less1L",
        "screenTime": "more8",
    }


# ============================================================================
# Remote Call Fixtures
# ============================================================================

@pytest.fixture
def remote_returning():
    """
    Factory fixture for a fake remote analysis call.

    Returns a function that accepts the payload to return and gives back an
    async callable recording each (user_id, lifestyle) it was called with.
    """

    def _make(payload):
        calls = []

        async def _remote_call(user_id, lifestyle):
            calls.append((user_id, lifestyle))
            return payload

        _remote_call.calls = calls
        return _remote_call

    return _make


@pytest.fixture
def failing_remote():
    """Remote call that always raises."""

    async def _remote_call(user_id, lifestyle):
        raise ConnectionError("analysis service unreachable")

    return _remote_call
