"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from bhasha_mitra.clients.gemini_client import GeminiClient
from bhasha_mitra.document.host import TextDocumentHost
from bhasha_mitra.document.sync import DocumentSync
from bhasha_mitra.pipeline.store import SuggestionStore
from bhasha_mitra.settings import Settings


@pytest.fixture
def sample_text() -> str:
    return "আমি কাল বাজারে গিয়েছিলাম। সে তাহার বাড়ি গেল।"


@pytest.fixture
def host(sample_text) -> TextDocumentHost:
    return TextDocumentHost(sample_text)


@pytest.fixture
def sync(host) -> DocumentSync:
    return DocumentSync(host)


@pytest.fixture
def store(sync) -> SuggestionStore:
    return SuggestionStore(sync)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", model="gemini-2.5-flash", doc_type="generic")


@pytest.fixture
def main_payload() -> dict:
    return {
        "_analysis": {
            "detectedTone": "neutral",
            "detectedStyle": "mixed",
            "overallQuality": "ভালো",
        },
        "spellingErrors": [
            {
                "wrong": "বাজারে",
                "suggestions": ["বাজারে"],
                "explanation": "উদাহরণ",
                "position": 2,
                "confidenceScore": 0.95,
                "severity": "critical",
            },
            {"wrong": "কাল", "suggestions": ["কালকে"], "confidenceScore": 0.5},
        ],
        "languageStyleMixing": {
            "detected": True,
            "recommendedStyle": "cholito",
            "reason": "সাধু ও চলিত মিশেছে",
            "corrections": [
                {"current": "তাহার", "suggestion": "তার", "type": "Sadhu->Cholito", "confidenceScore": 0.9},
            ],
        },
        "punctuationIssues": [
            {
                "issue": "Missing dari",
                "currentSentence": "সে তাহার বাড়ি গেল।",
                "correctedSentence": "সে তার বাড়ি গেল।",
                "explanation": "উদাহরণ",
                "confidenceScore": 0.8,
            }
        ],
        "euphonyImprovements": [
            {"current": "গিয়েছিলাম", "suggestions": ["গেছিলাম"], "reason": "শ্রুতিমধুর", "confidenceScore": 0.6},
        ],
    }


@pytest.fixture
def tone_payload() -> dict:
    return {
        "toneConversions": [
            {"current": "তাহার", "suggestion": "তাঁর", "reason": "সম্মানজনক", "position": 5, "confidenceScore": 0.9},
        ]
    }


@pytest.fixture
def style_payload() -> dict:
    return {
        "styleConversions": [
            {"current": "গিয়েছিলাম", "suggestion": "গিয়েছিলাম", "type": "Verb", "position": 3, "confidenceScore": 0.95},
        ]
    }


@pytest.fixture
def content_payload() -> dict:
    return {
        "contentType": "গল্প",
        "description": "ছোট বর্ণনা",
        "missingElements": ["উপসংহার"],
        "suggestions": ["শেষে একটি বাক্য যোগ করুন"],
    }


@pytest.fixture
def mock_gemini_client() -> GeminiClient:
    """Create a mock model client."""
    client = AsyncMock(spec=GeminiClient)
    client.analyze = AsyncMock(return_value=None)
    return client
