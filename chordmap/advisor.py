"""
AI advisor for the chord-info panel and the progression assistant.

Each request is an independent LangChain chain (prompt | Gemini chat model).
Replies are asked for as JSON and parsed into small dataclasses; anything that
does not parse raises ValueError so the caller can drop just that panel.
"""
import collections
import json
import re
from dataclasses import dataclass, field
from typing import Optional

from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from .config import load_config, require_api_key

ChordInfoRequest = collections.namedtuple(
    "ChordInfoRequest", ["chord_name", "key_label", "context", "language"]
)

LANGUAGE_NAMES = {
    "en": "English",
    "zh-HK": "Traditional Chinese (Cantonese, Hong Kong)",
    "zh-CN": "Simplified Chinese",
    "ja": "Japanese",
    "ko": "Korean",
}

STRINGS_PER_GUITAR = 6


@dataclass
class ChordAnalysis:
    usage: str
    feeling: str
    guitar_tip: str = ""
    piano_tip: str = ""
    extra: dict = field(default_factory=dict)


@dataclass
class ChordSubstitution:
    chord: str
    description: str
    roman_numeral: Optional[str] = None
    # (column_id, cell_index) positions on the current key map, filled in by chord_info
    map_positions: list = field(default_factory=list)


@dataclass
class ChordVoicing:
    frets: list          # low E to high E; -1 = muted, 0 = open
    base_fret: int = 1
    fingers: Optional[list] = None


@dataclass
class ChordSuggestion:
    chord_name: str
    roman_numeral: str
    explanation: str
    confidence: str


# ── Reply parsing ─────────────────────────────────────────────────────────────

def _reply_text(reply) -> str:
    if hasattr(reply, "content"):
        return reply.content
    return str(reply)


def _extract_json(text: str, pattern: str):
    match = re.search(pattern, text, re.DOTALL)
    if not match:
        raise ValueError(f"No JSON found in model output: {text[:200]!r}")
    return json.loads(match.group(0))


def parse_analysis(text: str) -> ChordAnalysis:
    data = _extract_json(text, r"\{.*\}")
    if not isinstance(data, dict) or "usage" not in data or "feeling" not in data:
        raise ValueError("Analysis reply must contain 'usage' and 'feeling'")
    known = ("usage", "feeling", "guitarTip", "pianoTip")
    return ChordAnalysis(
        usage=str(data["usage"]),
        feeling=str(data["feeling"]),
        guitar_tip=str(data.get("guitarTip", "")),
        piano_tip=str(data.get("pianoTip", "")),
        extra={k: v for k, v in data.items() if k not in known},
    )


def parse_substitutions(text: str) -> list[ChordSubstitution]:
    data = _extract_json(text, r"\[.*\]")
    if not isinstance(data, list):
        raise ValueError("Substitutions reply must be a JSON list")
    subs = []
    for item in data:
        if not isinstance(item, dict) or not item.get("chord"):
            continue
        subs.append(ChordSubstitution(
            chord=str(item["chord"]).strip(),
            description=str(item.get("description", "")),
            roman_numeral=item.get("romanNumeral"),
        ))
    return subs


def _int_list(values, name, low, high):
    if not isinstance(values, list) or len(values) != STRINGS_PER_GUITAR:
        raise ValueError(f"'{name}' must list {STRINGS_PER_GUITAR} strings")
    try:
        ints = [int(v) for v in values]
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must contain integers: {values!r}")
    if any(v < low or v > high for v in ints):
        raise ValueError(f"'{name}' out of range [{low}, {high}]: {ints}")
    return ints


def parse_voicing(text: str) -> ChordVoicing:
    data = _extract_json(text, r"\{.*\}")
    if not isinstance(data, dict):
        raise ValueError("Voicing reply must be a JSON object")
    frets = _int_list(data.get("frets"), "frets", -1, 24)
    base_fret = int(data.get("baseFret", data.get("base_fret", 1)))
    if base_fret < 1:
        raise ValueError(f"baseFret must be >= 1, got {base_fret}")
    fingers = data.get("fingers")
    if fingers is not None:
        fingers = _int_list(fingers, "fingers", 0, 4)
    return ChordVoicing(frets=frets, base_fret=base_fret, fingers=fingers)


def parse_suggestions(text: str) -> list[ChordSuggestion]:
    data = _extract_json(text, r"\[.*\]")
    if not isinstance(data, list):
        raise ValueError("Suggestions reply must be a JSON list")
    return [
        ChordSuggestion(
            chord_name=str(item["chordName"]),
            roman_numeral=str(item.get("romanNumeral", "")),
            explanation=str(item.get("explanation", "")),
            confidence=str(item.get("confidence", "Medium")),
        )
        for item in data
        if isinstance(item, dict) and item.get("chordName")
    ]


# ── Prompts ───────────────────────────────────────────────────────────────────

_SYSTEM = """
You are an expert music theorist and session musician.
Always answer in {language_name}, except chord symbols, which stay in standard notation.
Your final output must be ONLY the JSON described below, no prose around it.
"""  # noqa: E501

EXPLAIN_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """
Explain the chord {chord_name} used as "{context}" in the key of {key_label} major.
Return a JSON object:
{{"usage": "...how and where it is used...", "feeling": "...its emotional colour...",
  "guitarTip": "...", "pianoTip": "..."}}
"""),
])

SUBSTITUTIONS_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """
Suggest 3 to 5 substitutions for {chord_name} used as "{context}" in the key of {key_label} major.
Return a JSON list ordered from most to least common:
[{{"chord": "...", "description": "...", "romanNumeral": "..."}}]
"""),  # noqa: E501
])

VOICING_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """
Give one playable standard-tuning guitar voicing for {chord_name}.
Return a JSON object with 6 strings from low E to high E (-1 = muted, 0 = open):
{{"frets": [x, x, x, x, x, x], "baseFret": 1, "fingers": [0, 0, 0, 0, 0, 0]}}
"""),
])

PROGRESSION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", _SYSTEM),
    ("human", """
The progression so far in {key_label} major is: {progression}.
Suggest 3 chords that could come next.
Return a JSON list:
[{{"chordName": "...", "romanNumeral": "...", "explanation": "...", "confidence": "High|Medium|Low"}}]
"""),  # noqa: E501
])


def _prompt_inputs(request: ChordInfoRequest) -> dict:
    return {
        "chord_name": request.chord_name,
        "key_label": request.key_label,
        "context": request.context,
        "language_name": LANGUAGE_NAMES.get(request.language, "English"),
    }


class GeminiChordAdvisor:
    """
    Usage:
        advisor = GeminiChordAdvisor()          # reads ./configs/config.yaml
        analysis = await advisor.explain(request)

    Any LangChain chat model can be passed in place of Gemini.
    """

    def __init__(self, model=None, config: Optional[dict] = None) -> None:
        if model is None:
            config = config or load_config()
            model = ChatGoogleGenerativeAI(
                model=config["model"],
                google_api_key=require_api_key(config),
                temperature=config["temperature"],
            )
        self.model = model
        self.explain_chain = EXPLAIN_PROMPT | self.model
        self.substitutions_chain = SUBSTITUTIONS_PROMPT | self.model
        self.voicing_chain = VOICING_PROMPT | self.model
        self.progression_chain = PROGRESSION_PROMPT | self.model

    async def explain(self, request: ChordInfoRequest) -> ChordAnalysis:
        reply = await self.explain_chain.ainvoke(_prompt_inputs(request))
        return parse_analysis(_reply_text(reply))

    async def substitutions(self, request: ChordInfoRequest) -> list[ChordSubstitution]:
        reply = await self.substitutions_chain.ainvoke(_prompt_inputs(request))
        return parse_substitutions(_reply_text(reply))

    async def voicing(self, request: ChordInfoRequest) -> ChordVoicing:
        reply = await self.voicing_chain.ainvoke(_prompt_inputs(request))
        return parse_voicing(_reply_text(reply))

    async def suggest_progression(self, chords: list, key_label: str,
                                  language: str = "en") -> list[ChordSuggestion]:
        reply = await self.progression_chain.ainvoke({
            "progression": " -> ".join(chords) if chords else "(empty)",
            "key_label": key_label,
            "language_name": LANGUAGE_NAMES.get(language, "English"),
        })
        return parse_suggestions(_reply_text(reply))
