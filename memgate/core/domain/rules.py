"""Static rule tables for the retrieval gate.

Three ordered rule sets drive every decision:

- SKIP_RULES: filler, commands, acknowledgments and system traffic that never
  need a memory lookup.
- FORCE_RETRIEVE_RULES: explicit references to past conversation or personal
  facts. A match overrides every skip heuristic.
- RISK_RULES: destructive, security-sensitive or policy-relevant operations.

English rules use ASCII word boundaries so that a keyword glued to CJK text
(``hi你好``) still counts as a whole word. CJK rules carry no boundaries since
Chinese is written without spaces.

Patterns use the third-party ``regex`` module because the emoji-only rule
needs the ``\\p{Emoji}`` property class, which ``re`` does not support.
"""

from __future__ import annotations

from dataclasses import dataclass

import regex

_WORDS = regex.IGNORECASE | regex.ASCII
_TEXT = regex.IGNORECASE

# Length thresholds, in code points of the trimmed query
MIN_QUERY_LENGTH = 5
CJK_MIN_LENGTH = 6
DEFAULT_MIN_LENGTH = 15


@dataclass(frozen=True)
class PatternRule:
    """A named, compiled text matcher."""

    name: str
    pattern: regex.Pattern

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(name: str, pattern: str, flags: int = _TEXT) -> PatternRule:
    return PatternRule(name=name, pattern=regex.compile(pattern, flags))


SKIP_RULES: tuple[PatternRule, ...] = (
    _rule(
        "greeting",
        r"^(hi|hello|hey|good\s*(morning|afternoon|evening|night)|greetings|yo|sup|howdy|what'?s up)\b",
        _WORDS,
    ),
    _rule("slash_command", r"^/"),
    _rule(
        "dev_command",
        r"^(run|build|test|ls|cd|git|npm|pip|docker|curl|cat|grep|find|make|sudo)\b",
        _WORDS,
    ),
    _rule(
        "acknowledgment",
        r"^(yes|no|yep|nope|ok|okay|sure|fine|thanks|thank you|thx|ty|got it|understood"
        r"|cool|nice|great|good|perfect|awesome|👍|👎|✅|❌)\s*[.!]?$",
    ),
    _rule(
        "continuation",
        r"^(go ahead|continue|proceed|do it|start|begin|next|实施|开始|继续|好的|可以|行)\s*[.!]?$",
    ),
    _rule("emoji_only", r"^[\p{Emoji}\s]+$"),
    _rule("heartbeat", r"^HEARTBEAT"),
    _rule("system_message", r"^\[System"),
)

FORCE_RETRIEVE_RULES: tuple[PatternRule, ...] = (
    _rule("memory_reference", r"\b(remember|recall|forgot|memory|memories)\b", _WORDS),
    _rule("past_reference", r"\b(last time|before|previously|earlier|yesterday|ago)\b", _WORDS),
    _rule(
        "personal_fact",
        r"\b(my (name|email|phone|address|birthday|preference))\b",
        _WORDS,
    ),
    _rule("recall_question", r"\b(what did (i|we)|did i (tell|say|mention))\b", _WORDS),
    _rule("cjk_memory_reference", r"(你记得|之前|上次|以前|还记得|提到过|说过)"),
)

RISK_RULES: tuple[PatternRule, ...] = (
    _rule(
        "destructive_operation",
        r"\b(rm\s+-rf|delete|remove|wipe|chmod|chown|sudo|shell|bash|script|exec|command"
        r"|deploy|migration?)\b",
        _WORDS,
    ),
    _rule("filesystem", r"\b(file|filesystem|directory|folder|path)\b", _WORDS),
    _rule("credential", r"\b(secret|token|api\s*key|credential|password|ssh)\b", _WORDS),
    _rule("cjk_system_operation", r"(权限|文件|目录|删除|覆盖|执行|命令|脚本|部署)"),
    _rule("cjk_policy", r"(安全|风险|规范|守则)"),
)

# Han, Hiragana, Katakana and Hangul syllables
CJK_PATTERN = regex.compile(r"[\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff\uac00-\ud7af]")

QUESTION_MARKS = ("?", "？")

POLICY_HINTS_TAG = "[policy-hints]"

RISK_ANCHORS: tuple[str, ...] = (
    "安全守则",
    "文件操作规范",
    "风险控制",
    "security policy",
    "safe file operation",
)


def first_match(rules: tuple[PatternRule, ...], text: str) -> PatternRule | None:
    """Return the first rule in ``rules`` that matches ``text``."""
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def contains_cjk(text: str) -> bool:
    return CJK_PATTERN.search(text) is not None
