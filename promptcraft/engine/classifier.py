"""Rule-table intent classification.

Rules are evaluated in priority order against the lowercased prompt and the
first one that matches wins. Each rule also narrows the prompt to the
substring its generator interpolates by stripping a leading verb phrase such
as "write a story about".
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from . import lexicon
from .models import Intent, RequestType

logger = logging.getLogger(__name__)

_TRAILING_PUNCT = re.compile(r"[\s.!?]+$")
_WHITESPACE = re.compile(r"\s+")

# Politeness and framing that commonly precede the real verb.
_LEAD = (
    r"^(?:(?:please|pls|hey|hi|ok|so|can you|could you|would you|will you|"
    r"i want you to|i need you to|i want to|i need to|i would like to|i'd like to|"
    r"help me|let's|lets)[\s,]+)*"
)
_ARTICLE = r"(?:(?:a|an|the|some|my|our|this|these)\s+)?"
_JOINERS = r"about|on|regarding|for|of|where|in which|that|to|called|titled|named"


def _words(*terms: str) -> Pattern[str]:
    """Compile a word-boundary alternation of literal terms."""
    alternation = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
    return re.compile(r"(?<!\w)(?:" + alternation + r")(?!\w)")


def _prefix(verbs: str, nouns: Optional[str] = None, joiners: Optional[str] = None) -> Pattern[str]:
    pattern = rf"{_LEAD}(?:{verbs})\s+(?:me\s+|us\s+)?"
    if nouns:
        pattern += (
            rf"{_ARTICLE}(?:[\w'-]+\s+){{0,3}}?(?:{nouns})\s+"
            rf"(?:(?:{joiners or _JOINERS})\s+)?"
        )
    elif joiners:
        pattern += rf"(?:(?:{joiners})\s+)?"
    return re.compile(pattern, re.IGNORECASE)


def _has_any(lower: str, keywords: Iterable[str]) -> bool:
    return any(_words(keyword).search(lower) for keyword in keywords)


def narrow_subject(text: str, prefixes: Sequence[Pattern[str]] = ()) -> str:
    """Strip the first matching leading phrase and trailing punctuation.

    Falls back to the whole prompt when no prefix matches or stripping would
    leave nothing.
    """
    stripped = text.strip()
    cleaned = _TRAILING_PUNCT.sub("", stripped)
    for prefix in prefixes:
        match = prefix.match(cleaned)
        if match:
            rest = cleaned[match.end():].strip()
            if rest:
                return rest
    return cleaned or stripped


def detect_platform(lower: str) -> str:
    if _words("android").search(lower):
        return "Android"
    if _words("ios", "iphone", "ipad", "swift", "swiftui").search(lower):
        return "iOS"
    return "Cross-platform"


def detect_features(lower: str) -> List[str]:
    return [label for label, keywords in lexicon.FEATURES.items() if _has_any(lower, keywords)]


def detect_app_type(lower: str) -> Tuple[str, List[str]]:
    """Return the app category and the features that category implies."""
    for app_type, (keywords, features) in lexicon.APP_TYPES.items():
        if _has_any(lower, keywords):
            return app_type, list(features)
    return "general", []


# Vocabulary that marks a prompt as being about software.
_TECH_CONTEXT = _words(
    "code", "coding", "function", "functions", "method", "methods", "algorithm",
    "implement", "implementation", "regex", "api", "apis", "endpoint", "endpoints",
    "server", "backend", "database", "sql", "json", "csv", "yaml", "compile",
    "compiler", "syntax", "variable", "variables", "array", "arrays", "unit test",
    "unit tests", "command line", "cli", "http", "deploy", "deployment", "npm",
    "pip", "docker", "software", "programming", "app", "apps", "website", "web app",
    "files",
)
_LANGUAGE_NOUNS = (
    r"code|coding|script|scripts|program|programs|programming|app|apps|class|classes|"
    r"function|functions|library|module|on rails"
)


def _in_programming_context(lower: str, keyword: str) -> bool:
    if _TECH_CONTEXT.search(lower):
        return True
    kw = re.escape(keyword)
    return (
        re.search(rf"\b(?:in|using) {kw}\s*(?:$|[.,!?;:])|\b{kw} (?:{_LANGUAGE_NOUNS})\b", lower)
        is not None
    )


def detect_language(lower: str) -> Optional[str]:
    for language, keywords in lexicon.LANGUAGES.items():
        for keyword in keywords:
            if not re.search(rf"(?<![\w#+.]){re.escape(keyword)}(?![\w#+])", lower):
                continue
            if keyword in lexicon.AMBIGUOUS_LANGUAGE_KEYWORDS and not _in_programming_context(
                lower, keyword
            ):
                continue
            return language
    return None


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _app_details(lower: str) -> Dict[str, Any]:
    app_type, type_features = detect_app_type(lower)
    return {
        "platform": detect_platform(lower),
        "app_type": app_type,
        "features": _dedupe(type_features + detect_features(lower)),
    }


def _web_details(lower: str) -> Dict[str, Any]:
    return {"platform": "Web", "features": detect_features(lower)}


def _language_details(lower: str) -> Dict[str, Any]:
    return {"language": detect_language(lower)}


_POETRY_FORMS = ("haiku", "sonnet", "limerick", "free verse", "ballad", "ode", "lyrics")


def _poetry_details(lower: str) -> Dict[str, Any]:
    for form in _POETRY_FORMS:
        if _words(form).search(lower):
            return {"form": form}
    return {"form": "poem"}


_DOCUMENTS = (
    ("business plan", "business plan"),
    ("cover letter", "cover letter"),
    ("press release", "press release"),
    ("proposal", "proposal"),
    ("memo", "memo"),
    ("report", "report"),
    ("pitch", "pitch"),
    ("email", "email"),
    ("emails", "email"),
)


def _business_details(lower: str) -> Dict[str, Any]:
    for keyword, document in _DOCUMENTS:
        if _words(keyword).search(lower):
            return {"document": document}
    return {"document": "business document"}


@dataclass(frozen=True)
class Rule:
    """One entry of the priority table."""

    request_type: RequestType
    matches: Callable[[str], bool]
    slot: str
    prefixes: Tuple[Pattern[str], ...] = ()
    details: Optional[Callable[[str], Dict[str, Any]]] = None
    name: str = ""

    def apply(self, text: str, lower: str) -> Optional[Intent]:
        if not self.matches(lower):
            return None
        return Intent(
            type=self.request_type,
            subject=narrow_subject(text, self.prefixes),
            slot=self.slot,
            details=self.details(lower) if self.details else {},
        )


def _search(pattern: Pattern[str]) -> Callable[[str], bool]:
    return lambda lower: pattern.search(lower) is not None


_EXPLANATION_LEAD = re.compile(
    _LEAD + r"(?:explain|teach me|eli5|what is|what are|what's|how does|how do\b.*\bwork|"
    r"why do|why does|why is|why are|describe how)\b"
)
_EXPLANATION_PREFIXES = (
    re.compile(
        _LEAD + r"(?:explain|teach me(?:\s+about)?|eli5:?|what is|what are|what's)\s+"
        r"(?:to me\s+)?(?:(?:like|as if) i'm five:?\s+)?",
        re.IGNORECASE,
    ),
)

_DEBUG_WORDS = re.compile(r"\b(?:debug\w*|traceback|stack ?trace|segfault|segmentation fault)\b")
# Everyday words that only describe a defect when the prompt is about software.
_FAULT_WORDS = re.compile(
    r"\b(?:bugs?|fix|fixes|fixing|errors?|exceptions?|crash|crashes|crashing|crashed|"
    r"broken|not working|doesn't work|fails|failing|failed)\b"
)
_STATUS_CODE = re.compile(
    r"\b[45]\d\d\s+(?:error|status|response)\b|\b(?:status|http|error)\s+(?:code\s+)?[45]\d\d\b"
)
_POETRY_WORDS = _words("poem", "poems", "poetry", "haiku", "sonnet", "limerick", "verse", "lyrics")
_CONTENT_WORDS = _words(
    "blog", "blogs", "article", "articles", "newsletter", "content", "listicle", "op-ed", "seo"
)
_BUSINESS_WORDS = _words(
    "email", "emails", "proposal", "business plan", "cover letter", "memo",
    "press release", "report", "pitch",
)
_WEB_WORDS = _words(
    "website", "web app", "webapp", "web application", "webpage", "web page",
    "landing page", "frontend", "front-end", "saas",
)
_APP_WORDS = _words("app", "apps", "application", "mobile", "android", "ios", "iphone", "ipad")
_CODE_WORDS = _words("code", "coding", "function", "algorithm", "implement", "regex")
# Also ordinary English ("a class trip", "a TV program"); need software context.
_SOFTWARE_NOUNS = _words(
    "class", "classes", "program", "programs", "query", "queries", "script", "scripts"
)
_STORY_WORDS = _words(
    "story", "stories", "tale", "tales", "fiction", "novel", "narrative", "fable",
    "describe", "imagine", "once upon a time",
)
_WRITE_ABOUT = re.compile(r"\bwrite about\b")
_IMAGE_WORDS = _words(
    "image", "images", "picture", "pictures", "photo", "photos", "illustration",
    "drawing", "painting of", "logo", "artwork", "wallpaper",
)
_IDEA_WORDS = re.compile(
    r"\b(?:ideas?|brainstorm\w*|suggestions?|ways to|how can (?:i|we)|tips)\b"
)
_EXPLAIN_WORDS = re.compile(r"\b(?:explain\w*|understand\w*|learn\w*|what is|how does|why)\b")


def _is_debugging(lower: str) -> bool:
    if _DEBUG_WORDS.search(lower):
        return True
    if not _FAULT_WORDS.search(lower):
        return False
    return bool(
        _TECH_CONTEXT.search(lower)
        or _SOFTWARE_NOUNS.search(lower)
        or _STATUS_CODE.search(lower)
        or detect_language(lower)
    )


def _is_code(lower: str) -> bool:
    if _CODE_WORDS.search(lower) or detect_language(lower) is not None:
        return True
    return _SOFTWARE_NOUNS.search(lower) is not None and _TECH_CONTEXT.search(lower) is not None


def _is_creative(lower: str) -> bool:
    if _STORY_WORDS.search(lower):
        return True
    return _WRITE_ABOUT.search(lower) is not None and any(
        keyword in lower for keyword in lexicon.CHARACTERS
    )


_MAKE = r"write|create|compose|craft|generate|tell|give|draft|make|produce|prepare"
_BUILD = r"build|create|make|develop|design|code|write|program|generate"

DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(
        RequestType.EXPLANATION,
        lambda lower: _EXPLANATION_LEAD.match(lower) is not None,
        slot="concept",
        prefixes=_EXPLANATION_PREFIXES,
        name="explanation-lead",
    ),
    Rule(
        RequestType.DEBUGGING,
        _is_debugging,
        slot="problem",
        prefixes=(_prefix(r"debug|fix|troubleshoot|diagnose|solve|resolve"),),
        details=_language_details,
    ),
    Rule(
        RequestType.POETRY,
        _search(_POETRY_WORDS),
        slot="subject",
        prefixes=(
            _prefix(_MAKE, nouns=r"poem|poetry|haiku|sonnet|limerick|verse|lyrics|song"),
        ),
        details=_poetry_details,
    ),
    Rule(
        RequestType.CONTENT_WRITING,
        _search(_CONTENT_WORDS),
        slot="topic",
        prefixes=(
            _prefix(
                _MAKE,
                nouns=r"blog post|blog|article|newsletter|content|listicle|op-ed|post|piece",
            ),
        ),
    ),
    Rule(
        RequestType.BUSINESS_WRITING,
        _search(_BUSINESS_WORDS),
        slot="topic",
        prefixes=(
            _prefix(
                _MAKE,
                nouns=r"business plan|cover letter|press release|emails?|proposal|memo|report|pitch",
            ),
        ),
        details=_business_details,
    ),
    Rule(
        RequestType.WEB_DEVELOPMENT,
        _search(_WEB_WORDS),
        slot="description",
        prefixes=(_prefix(_BUILD),),
        details=_web_details,
    ),
    Rule(
        RequestType.APP_DEVELOPMENT,
        _search(_APP_WORDS),
        slot="description",
        prefixes=(_prefix(_BUILD),),
        details=_app_details,
    ),
    Rule(
        RequestType.CODE_WRITING,
        _is_code,
        slot="task",
        prefixes=(_prefix(r"write|create|implement|code|build|make|generate|develop"),),
        details=_language_details,
    ),
    Rule(
        RequestType.CREATIVE_WRITING,
        _is_creative,
        slot="subject",
        prefixes=(
            _prefix(_MAKE, nouns=r"story|stories|tale|fiction|novel|narrative|fable"),
            _prefix(r"write", joiners=r"about"),
            re.compile(_LEAD + r"(?:describe|imagine)\s+", re.IGNORECASE),
        ),
    ),
    Rule(
        RequestType.IMAGE_GENERATION,
        _search(_IMAGE_WORDS),
        slot="subject",
        prefixes=(
            _prefix(
                r"create|generate|make|draw|design|paint|render|produce|give",
                nouns=r"image|picture|photo|illustration|drawing|painting|logo|artwork|wallpaper",
            ),
        ),
    ),
    Rule(
        RequestType.BRAINSTORMING,
        _search(_IDEA_WORDS),
        slot="challenge",
        prefixes=(
            _prefix(r"give|suggest|brainstorm|list|share|generate|come up with|find",
                    nouns=r"ideas|idea|suggestions|ways|tips"),
            re.compile(_LEAD + r"brainstorm\s+", re.IGNORECASE),
        ),
    ),
    Rule(
        RequestType.EXPLANATION,
        _search(_EXPLAIN_WORDS),
        slot="concept",
        prefixes=(
            re.compile(
                _LEAD + r"(?:explain|help me understand|understand|learn about|learn)\s+",
                re.IGNORECASE,
            ),
        ),
    ),
    Rule(RequestType.GENERAL, lambda lower: True, slot="prompt", name="general"),
)


@dataclass
class IntentClassifier:
    """First-match-wins classifier over an ordered rule table."""

    rules: Sequence[Rule] = field(default_factory=lambda: DEFAULT_RULES)

    def classify(self, text: str) -> Intent:
        collapsed = _WHITESPACE.sub(" ", text or "").strip()
        lower = collapsed.lower()
        for rule in self.rules:
            intent = rule.apply(collapsed, lower)
            if intent is not None:
                logger.debug(
                    "Classified prompt as %s via rule %s", intent.type.value, rule.name or rule.slot
                )
                return intent
        # Custom rule tables may omit the catch-all.
        return Intent(type=RequestType.GENERAL, subject=narrow_subject(collapsed), slot="prompt")


_default = IntentClassifier()


def classify(text: str) -> Intent:
    """Classify ``text`` with the built-in precedence table."""
    return _default.classify(text)
