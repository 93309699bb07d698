# services/insight_generator.py
"""
Natural-language mood insights.

Two strategies share the InsightGenerator contract: RemoteInsightGenerator
calls a hosted text-generation model, LocalInsightGenerator builds a
deterministic summary from canned text. FallbackInsightGenerator tries the
first and substitutes the second on RemoteGenerationError.
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, NamedTuple, Optional

import requests

from wellness.core.config import settings
from wellness.core.exceptions import RemoteGenerationError
from wellness.services.mood_trend import MoodTrends, UserData

logger = logging.getLogger(__name__)


SOURCE_REMOTE = "remote"
SOURCE_LOCAL = "local"


class GeneratedInsight(NamedTuple):
    text: str
    source: str
    sections: Dict[str, str]

    @property
    def is_local(self) -> bool:
        return self.source == SOURCE_LOCAL


class InsightGenerator(ABC):
    @abstractmethod
    def generate(self, user_data: UserData, trends: MoodTrends) -> str:
        ...


# =====================================================================
# REMOTE STRATEGY
# =====================================================================

def build_prompt(user_data: UserData, trends: MoodTrends) -> str:
    return (
        "Analyze this mental health data and provide insights:\n\n"
        f"Mood Trend: {trends.direction}\n"
        f"Recent Average Mood: {trends.recent_avg:.1f}/10\n"
        f"Entries Analyzed: {len(user_data.mood_entries)} mood entries, "
        f"{len(user_data.journal_entries)} journal entries\n\n"
        "Please provide personalized insights and recommendations."
    )


class RemoteInsightGenerator(InsightGenerator):
    """Hugging Face style inference endpoint client."""

    def __init__(
        self,
        api_key: str,
        model_url: str,
        timeout: float = 30.0,
        max_length: int = 150,
        temperature: float = 0.7,
    ):
        self.api_key = api_key
        self.model_url = model_url
        self.timeout = timeout
        self.max_length = max_length
        self.temperature = temperature

    @classmethod
    def from_settings(cls) -> "RemoteInsightGenerator":
        return cls(
            api_key=settings.HUGGING_FACE_API_KEY,
            model_url=settings.HUGGING_FACE_MODEL_URL,
            timeout=settings.INSIGHT_REQUEST_TIMEOUT,
            max_length=settings.INSIGHT_MAX_LENGTH,
            temperature=settings.INSIGHT_TEMPERATURE,
        )

    def generate(self, user_data: UserData, trends: MoodTrends) -> str:
        payload = {
            "inputs": build_prompt(user_data, trends),
            "parameters": {
                "max_length": self.max_length,
                "temperature": self.temperature,
                "do_sample": True,
                "return_full_text": False,
            },
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = requests.post(
                self.model_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.Timeout as e:
            raise RemoteGenerationError(f"Text generation timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise RemoteGenerationError(f"Text generation request failed: {e}") from e

        if not response.ok:
            raise RemoteGenerationError(
                f"Text generation error: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteGenerationError(
                "Text generation returned invalid JSON",
                status_code=response.status_code,
                body=response.text[:500],
            ) from e

        text = self._extract_generated_text(result)
        if text is None or not text.strip():
            raise RemoteGenerationError(
                "Text generation response had no generated_text",
                status_code=response.status_code,
                body=str(result)[:500],
            )
        return text.strip()

    @staticmethod
    def _extract_generated_text(result) -> Optional[str]:
        if isinstance(result, list) and result and isinstance(result[0], dict):
            value = result[0].get("generated_text")
        elif isinstance(result, dict):
            value = result.get("generated_text")
        else:
            return None
        return value if isinstance(value, str) else None


# =====================================================================
# LOCAL STRATEGY
# =====================================================================

TREND_MESSAGES = {
    "improving_strongly": "🎉 Excellent! Your mood has been significantly improving. You're building great momentum in your mental wellness journey.",
    "improving": "📈 Great progress! Your mood has been trending upward. Keep up the positive momentum!",
    "declining_strongly": "💙 I notice your mood has been declining. Remember, it's okay to not be okay. Consider reaching out to friends, family, or a mental health professional.",
    "declining": "📉 Your mood has been slightly declining. This is a good time to practice self-care and reach out to your support network.",
    "stable": "⚖️ Your mood has been stable. This consistency provides a solid foundation for your mental wellness journey.",
}

RECOMMENDATIONS = {
    "low": [
        "Practice deep breathing exercises for 5-10 minutes daily",
        "Try our mindfulness games to improve focus and calm",
        "Consider journaling your thoughts and feelings",
        "Reach out to a friend or family member for support",
        "Engage in physical activity you enjoy",
    ],
    "mid": [
        "Continue with your current positive practices",
        "Try our zen garden or ocean waves games for relaxation",
        "Practice gratitude by writing down 3 things you're thankful for",
        "Consider exploring new hobbies or activities",
        "Maintain regular sleep and exercise routines",
    ],
    "high": [
        "Keep up your excellent mental wellness practices!",
        "Share your positive energy with others",
        "Try our advanced mindfulness games",
        "Consider mentoring or helping others",
        "Document what's working well for you",
    ],
}

ACTIVITY_SUGGESTIONS = [
    "Breathing exercises for relaxation",
    "Candle focus meditation for concentration",
    "Zen garden for peaceful reflection",
    "Ocean waves for calming sounds",
    "Journal writing for self-reflection",
]


def trend_bucket(mood_trend: float) -> str:
    if mood_trend > 1:
        return "improving_strongly"
    if mood_trend > 0:
        return "improving"
    if mood_trend < -1:
        return "declining_strongly"
    if mood_trend < 0:
        return "declining"
    return "stable"


def recommendation_tier(recent_avg: float) -> str:
    if recent_avg < 5:
        return "low"
    if recent_avg < 7:
        return "mid"
    return "high"


def _bullets(items) -> str:
    return "\n".join(f"• {item}" for item in items)


class LocalInsightGenerator(InsightGenerator):
    """Deterministic rule-based summary. No I/O."""

    def build_sections(self, user_data: UserData, trends: MoodTrends) -> Dict[str, str]:
        sections = {"trend_analysis": TREND_MESSAGES[trend_bucket(trends.mood_trend)]}

        moods = [entry.mood for entry in user_data.mood_entries]
        if moods:
            most_frequent, count = Counter(moods).most_common(1)[0]
            percentage = int(count * 100 / len(moods) + 0.5)
            patterns = (
                "\n\n📊 Mood Patterns:\n"
                f'• Your most frequent mood is "{most_frequent}" ({percentage}% of entries)\n'
            )
            recent = list(reversed(moods[-3:]))
            patterns += f"• Recent mood pattern: {', '.join(recent)}\n"
            sections["patterns"] = patterns
        else:
            sections["patterns"] = ""

        tier = recommendation_tier(trends.recent_avg)
        sections["recommendations"] = (
            "\n💡 Personalized Recommendations:\n" + _bullets(RECOMMENDATIONS[tier])
        )
        sections["suggested_activities"] = (
            "\n🎮 Suggested Activities:\n" + _bullets(ACTIVITY_SUGGESTIONS)
        )
        return sections

    def generate(self, user_data: UserData, trends: MoodTrends) -> str:
        sections = self.build_sections(user_data, trends)
        return "".join(
            sections[key]
            for key in ("trend_analysis", "patterns", "recommendations", "suggested_activities")
        )


# =====================================================================
# REMOTE WITH LOCAL FALLBACK
# =====================================================================

class FallbackInsightGenerator:
    """Try the remote strategy; on RemoteGenerationError use the local one."""

    def __init__(self, remote: InsightGenerator, local: LocalInsightGenerator):
        self.remote = remote
        self.local = local

    def generate(self, user_data: UserData, trends: MoodTrends) -> GeneratedInsight:
        try:
            text = self.remote.generate(user_data, trends)
        except RemoteGenerationError as e:
            logger.warning(
                "Remote insight generation failed for user %s (status=%s): %s; using local analysis",
                user_data.user_id, e.status_code, e,
            )
            sections = self.local.build_sections(user_data, trends)
            return GeneratedInsight(
                text=self.local.generate(user_data, trends),
                source=SOURCE_LOCAL,
                sections=sections,
            )
        return GeneratedInsight(text=text, source=SOURCE_REMOTE, sections={"insights": text})
