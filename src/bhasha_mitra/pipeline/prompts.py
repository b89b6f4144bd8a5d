"""Prompt builders and the option tables behind them."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DocTypeConfig:
    label: str
    description: str
    default_tone: str
    role_instruction: str
    check_focus: str


DOC_TYPE_CONFIG: dict[str, DocTypeConfig] = {
    "generic": DocTypeConfig(
        label="সাধারণ",
        description="সাধারণ ব্যাকরণ ও বানান শুদ্ধ করার জন্য।",
        default_tone="neutral",
        role_instruction="You are an expert Bengali Linguistic Editor. Ensure grammatically correct, natural Bengali.",
        check_focus="Standard grammar, Bangla Academy spelling conventions and clarity.",
    ),
    "academic": DocTypeConfig(
        label="একাডেমিক",
        description="গবেষণা, থিসিস বা শিক্ষা সংক্রান্ত লেখার জন্য।",
        default_tone="academic",
        role_instruction="You are a Bengali Academic Scholar. Ensure precision, objective tone and formal vocabulary.",
        check_focus="Sentence structure consistency, terminology and logical flow.",
    ),
    "official": DocTypeConfig(
        label="অফিশিয়াল",
        description="দাপ্তরিক চিঠি বা আবেদনের জন্য।",
        default_tone="formal",
        role_instruction="You are a Government Communication Specialist. Ensure politeness and protocol.",
        check_focus="Honorifics, formal verbs and concise messaging.",
    ),
    "marketing": DocTypeConfig(
        label="মার্কেটিং",
        description="বিজ্ঞাপন বা প্রচারণার জন্য।",
        default_tone="persuasive",
        role_instruction="You are a Senior Bengali Copywriter. Attract and convert readers.",
        check_focus="Flow, power words and a clear call to action.",
    ),
    "social": DocTypeConfig(
        label="সোশ্যাল মিডিয়া",
        description="ফেসবুক, ব্লগ বা ক্যাপশনের জন্য।",
        default_tone="informal",
        role_instruction="You are a Social Media writer. Use engaging, conversational Bengali.",
        check_focus="Allow creative punctuation and slang, but fix actual typos.",
    ),
}

TONE_INSTRUCTIONS: dict[str, str] = {
    "formal": "Formal (official). Use 'Apni', avoid slang, be polite and distant.",
    "informal": "Informal. Use 'Tumi', conversational like speaking to a friend.",
    "professional": "Professional. Clear, concise, business-like.",
    "friendly": "Friendly. Warm, welcoming, positive words.",
    "respectful": "Respectful. High honorifics, humble self-reference.",
    "persuasive": "Persuasive. Action verbs, highlight benefits, create urgency.",
    "neutral": "Neutral. Objective, journalistic, just facts.",
    "academic": "Academic. Scholarly vocabulary, third-person perspective.",
}

TONE_NAMES: dict[str, str] = {
    "formal": "আনুষ্ঠানিক",
    "informal": "অনানুষ্ঠানিক",
    "professional": "পেশাদার",
    "friendly": "বন্ধুত্বপূর্ণ",
    "respectful": "সম্মানজনক",
    "persuasive": "প্রভাবশালী",
    "neutral": "নিরপেক্ষ",
    "academic": "শিক্ষামূলক",
}

STYLE_INSTRUCTIONS: dict[str, str] = {
    "sadhu": "Sadhu Bhasha (literary). Classical full verb forms (korchi -> koritechi), pronouns like tahar.",
    "cholito": "Cholito Bhasha (standard colloquial). Short modern verb forms (koritechi -> korchi), pronouns like tar.",
}

STYLE_NAMES: dict[str, str] = {
    "none": "কোনটি নয়",
    "sadhu": "সাধু রীতি",
    "cholito": "চলিত রীতি",
}

BENGALI_RULES = """\
- Never mix Sadhu and Cholito forms; prefer Cholito unless the text is literary.
- Follow Bangla Academy spelling. Distinguish কি and কী.
- Do not flag correctly agglutinated suffixes (রা, এর) as typos.
- English words written in Bengali script are valid unless mis-transliterated.
- Ensure spaces after commas and dari (।)."""

MAIN_SCHEMA = """\
{
  "_analysis": {"detectedTone": "...", "detectedStyle": "sadhu|cholito|mixed", "overallQuality": "..."},
  "spellingErrors": [{"wrong": "exact substring", "suggestions": ["..."], "explanation": "...",
                      "position": 0, "confidenceScore": 0.95, "severity": "critical|minor"}],
  "languageStyleMixing": {"detected": true, "recommendedStyle": "cholito|sadhu", "reason": "...",
                          "corrections": [{"current": "...", "suggestion": "...", "type": "Sadhu->Cholito",
                                           "position": 0, "confidenceScore": 0.9}]},
  "punctuationIssues": [{"issue": "...", "currentSentence": "...", "correctedSentence": "...",
                         "explanation": "...", "position": 0, "confidenceScore": 0.85}],
  "euphonyImprovements": [{"current": "...", "suggestions": ["..."], "reason": "...",
                           "position": 0, "confidenceScore": 0.8}]
}"""


def get_doc_type(doc_type: str) -> DocTypeConfig:
    return DOC_TYPE_CONFIG.get(doc_type, DOC_TYPE_CONFIG["generic"])


def build_main_prompt(text: str, doc_type: str = "generic") -> str:
    cfg = get_doc_type(doc_type)
    return f"""SYSTEM ROLE: {cfg.role_instruction}
CONTEXT: Document type "{cfg.label}".
FOCUS: {cfg.check_focus}

LANGUAGE RULES:
{BENGALI_RULES}

INPUT TEXT:
\"\"\"{text}\"\"\"

INSTRUCTIONS:
1. Words are separated by whitespace; "position" is the 0-based index in that list.
2. Copy "wrong", "current" and "currentSentence" exactly from the input.
3. Fill "_analysis" first. Do not report items with confidenceScore below 0.8.
4. Return pure JSON only.

OUTPUT SCHEMA (JSON):
{MAIN_SCHEMA}
"""


def build_tone_prompt(text: str, tone: str) -> str:
    instruction = TONE_INSTRUCTIONS.get(tone, tone)
    return f"""ROLE: You are an expert Bengali stylistic editor.
TASK: Rewrite only the parts of the text that do not match the {tone.upper()} tone.
TARGET: {instruction}

INPUT TEXT:
\"\"\"{text}\"\"\"

RULES: preserve meaning, change as little as possible, "current" must be an exact
substring, "position" is the 0-based word index.

OUTPUT JSON:
{{"toneConversions": [{{"current": "...", "suggestion": "...", "reason": "...", "position": 0, "confidenceScore": 0.9}}]}}
If nothing needs to change return {{"toneConversions": []}}
"""


def build_style_prompt(text: str, style: str) -> str:
    return f"""ROLE: Expert Bengali grammarian.
TASK: Convert the text strictly to {style.upper()} bhasha.
TARGET: {STYLE_INSTRUCTIONS.get(style, style)}

INPUT TEXT:
\"\"\"{text}\"\"\"

"current" must be an exact copy from the input, "position" is the 0-based word index.

OUTPUT JSON:
{{"styleConversions": [{{"current": "...", "suggestion": "...", "type": "Verb/Pronoun", "position": 0, "confidenceScore": 0.95}}]}}
If the text already matches return {{"styleConversions": []}}
"""


def build_content_prompt(text: str, doc_type: str = "generic") -> str:
    cfg = get_doc_type(doc_type)
    return f"""Role: {cfg.role_instruction}
Task: Analyze the content structure briefly.

INPUT: \"\"\"{text}\"\"\"

OUTPUT JSON:
{{"contentType": "Type in Bangla (1-2 words)", "description": "Short description in Bangla",
  "missingElements": ["..."], "suggestions": ["..."]}}
"""
