from functools import partial
from typing import Callable, Dict, Iterable, List, Optional, Pattern
import re
import threading

from hybrid_intent.domain.models.intent import ClassificationMethod, ClassificationResult, Rule
from hybrid_intent.domain.schemas.training import KeywordRuleSet, KeywordRuleTable
from hybrid_intent.utils.exceptions import RuleConfigurationError
from hybrid_intent.utils.logger import get_logger

_EMOJI = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF\U0001F900-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]"
)

EMOJI_MESSAGE_MAX_LENGTH = 50


class KeywordRuleEngine:
    """
    Ordered, first-match-wins keyword classifier.

    Phrase lists come from a ``KeywordRuleSet``; this class only knows how
    each category combines its lists. Rule order and tier confidences are
    taken from the rule set as given.
    """

    def __init__(self, rule_set: KeywordRuleSet):
        """
        Bind every rule table to its predicate.

        Args:
            rule_set: Validated rule tables in precedence order

        Raises:
            RuleConfigurationError: If a table names a category with no predicate
        """
        self.logger = get_logger(__name__)
        self.version = rule_set.version
        self._tables: Dict[str, KeywordRuleTable] = {
            table.category: table for table in rule_set.rules
        }
        self._pattern_cache: Dict[str, Pattern] = {}
        self._cache_lock = threading.Lock()

        predicates: Dict[str, Callable[[str, KeywordRuleTable], bool]] = {
            "business-discussion": self._is_business_discussion,
            "contextual-reference": self._is_contextual_reference,
            "general-knowledge": self._is_general_knowledge,
            "technical-question": self._is_technical_question,
            "command": self._is_command,
            "small-talk": self._is_small_talk,
            "real-time-knowledge": self._is_real_time_knowledge,
            "feedback": self._is_feedback,
        }

        unbound = [table.category for table in rule_set.rules if table.category not in predicates]
        if unbound:
            raise RuleConfigurationError(
                "Rule tables reference categories without a predicate",
                details={"categories": unbound}
            )

        self.rules: List[Rule] = [
            Rule(
                predicate=partial(predicates[table.category], table=table),
                category=table.category,
                confidence=table.confidence
            )
            for table in rule_set.rules
        ]

        self._operator_patterns: List[Pattern] = []
        knowledge = self._tables.get("general-knowledge")
        if knowledge:
            self._operator_patterns = [
                re.compile(rf"\s{re.escape(symbol)}\s")
                for symbol in knowledge.terms("arithmetic")
            ]

        self.logger.info(
            f"Keyword engine ready with rules v{self.version}: "
            f"{', '.join(rule.category for rule in self.rules)}"
        )

    def classify(self, message: str) -> ClassificationResult:
        """
        Return the first matching rule's category and tier confidence.

        Args:
            message: Raw message text

        Returns:
            The matched classification, or ``unknown`` with zero confidence
        """
        content = message.lower().strip()
        if not content:
            return ClassificationResult.unknown(ClassificationMethod.KEYWORD)

        for rule in self.rules:
            if rule.matches(content):
                return ClassificationResult(rule.category, rule.confidence, ClassificationMethod.KEYWORD)

        return ClassificationResult.unknown(ClassificationMethod.KEYWORD)

    # Matching primitives

    def _pattern(self, term: str) -> Pattern:
        pattern = self._pattern_cache.get(term)
        if pattern is None:
            with self._cache_lock:
                pattern = self._pattern_cache.get(term)
                if pattern is None:
                    pattern = re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")
                    self._pattern_cache[term] = pattern
        return pattern

    def contains_term(self, content: str, term: str) -> bool:
        """Whole-word (or whole-phrase) match of ``term`` inside ``content``."""
        return self._pattern(term).search(content) is not None

    def contains_any(self, content: str, terms: Iterable[str]) -> bool:
        return any(self.contains_term(content, term) for term in terms)

    def matched_terms(self, content: str, terms: Iterable[str]) -> List[str]:
        return [term for term in terms if self.contains_term(content, term)]

    def cached_patterns(self) -> int:
        return len(self._pattern_cache)

    def _has_arithmetic(self, content: str) -> bool:
        padded = f" {content} "
        return any(pattern.search(padded) for pattern in self._operator_patterns)

    # Category predicates, evaluated on lower-cased, trimmed text

    def _is_business_discussion(self, content: str, table: KeywordRuleTable) -> bool:
        if self.contains_any(content, table.terms("ownership")):
            return True

        # Personal pronoun + business noun + question structure
        return (
            self.contains_any(content, table.terms("pronouns"))
            and self.contains_any(content, table.terms("business_nouns"))
            and self.contains_any(content, table.terms("question_words"))
        )

    def _is_contextual_reference(self, content: str, table: KeywordRuleTable) -> bool:
        if self.contains_any(content, table.terms("time_scopes")):
            return False

        references = self.matched_terms(content, table.terms("references"))
        if not references:
            return False

        return content.endswith("?") or any(content.startswith(ref) for ref in references)

    def _is_general_knowledge(self, content: str, table: KeywordRuleTable) -> bool:
        if self._mentions_current_authority(content, table.terms("authority_figures")):
            return False

        real_time = self._tables.get("real-time-knowledge")
        if real_time is not None and self._is_real_time_knowledge(content, real_time):
            return False

        if not self.contains_any(content, table.terms("question_words")):
            return False

        return self.contains_any(content, table.terms("topics")) or self._has_arithmetic(content)

    def _is_technical_question(self, content: str, table: KeywordRuleTable) -> bool:
        if not self.contains_any(content, table.terms("terms")):
            return False

        return content.endswith("?") or self.contains_any(content, table.terms("question_phrases"))

    def _is_command(self, content: str, table: KeywordRuleTable) -> bool:
        if self.contains_any(content, table.terms("priority")):
            return True

        # explain/describe/tell me are commands only when aimed at a concept
        if self.contains_any(content, table.terms("explain_verbs")):
            return self.contains_any(content, table.terms("concept_words"))

        return self.contains_any(content, table.terms("verbs"))

    def _is_small_talk(self, content: str, table: KeywordRuleTable) -> bool:
        if self.contains_any(content, table.terms("greetings")):
            return True
        if self.contains_any(content, table.terms("casual")):
            return True
        return bool(_EMOJI.search(content)) and len(content) < EMOJI_MESSAGE_MAX_LENGTH

    def _is_real_time_knowledge(self, content: str, table: KeywordRuleTable) -> bool:
        if self._mentions_current_authority(content, table.terms("authority_figures")):
            return True
        if self.contains_any(content, table.terms("current_leader")):
            return True
        return self.contains_any(content, table.terms("indicators"))

    def _is_feedback(self, content: str, table: KeywordRuleTable) -> bool:
        return self.contains_any(content, table.terms("indicators"))

    def _mentions_current_authority(self, content: str, figures: List[str]) -> bool:
        return self.contains_term(content, "current") and self.contains_any(content, figures)

    def table(self, category: str) -> Optional[KeywordRuleTable]:
        return self._tables.get(category)
