"""
Unit Tests for the detection strategies and their reduction
"""

from quiz_toolkit.extractor.detection import DocumentFormat, StrategyVerdict, select_best
from quiz_toolkit.extractor.detection.strategies import (
    CONTENT_KEYWORD,
    PATTERN_FREQUENCY,
    STATISTICAL,
    TEMPLATE,
    DetectionInput,
    content_keyword,
    pattern_frequency,
    statistical_ratio,
    template_matching,
)

MIXED_TEXT = (
    "1. Which is a mammal?\n"
    "A) Shark\n"
    "B) Whale\n"
    "C) Trout\n"
    "D) Eel\n"
    "2. Whales are fish.\n"
    "True\n"
    "False"
)


class TestPatternFrequency:
    """Tests for the pattern-frequency strategy."""

    def test_pattern_frequency_when_options_and_true_false_then_mixed(self):
        """Lettered options plus True/False lines should give mixed."""
        verdict = pattern_frequency(DetectionInput.build(MIXED_TEXT))
        assert verdict.format is DocumentFormat.MIXED
        assert verdict.confidence == 0.75

    def test_pattern_frequency_when_two_options_per_question_then_scaled(self):
        """MCQ confidence should scale with options per question."""
        text = "1. Yes or no?\nA) Yes\nB) No"
        verdict = pattern_frequency(DetectionInput.build(text))
        assert verdict.format is DocumentFormat.MCQ
        assert verdict.confidence == 0.5

    def test_pattern_frequency_when_no_markers_then_unknown(self, prose_text):
        """Prose should give unknown."""
        verdict = pattern_frequency(DetectionInput.build(prose_text))
        assert verdict.format is DocumentFormat.UNKNOWN
        assert verdict.confidence == 0.0


class TestOtherStrategies:
    """Tests for template, statistical and keyword strategies."""

    def test_template_when_true_false_layout_then_template_ceiling(self, true_false_text):
        """Full coverage should cap at the template's own confidence."""
        verdict = template_matching(DetectionInput.build(true_false_text))
        assert verdict.format is DocumentFormat.TRUE_FALSE
        assert verdict.confidence == 0.85
        assert verdict.patterns.option_pattern == "true-false:options"

    def test_template_when_no_option_lines_then_unknown(self, prose_text):
        """Templates without any option line should not score."""
        verdict = template_matching(DetectionInput.build(prose_text))
        assert verdict.format is DocumentFormat.UNKNOWN

    def test_statistical_when_option_heavy_then_mcq(self, mcq_text):
        """High question and option ratios should give mcq."""
        verdict = statistical_ratio(DetectionInput.build(mcq_text))
        assert verdict.format is DocumentFormat.MCQ
        assert 0.0 < verdict.confidence <= 0.8

    def test_keyword_when_lettered_tokens_then_mcq(self):
        """a) b) c) tokens should suggest mcq."""
        verdict = content_keyword(DetectionInput.build("Pick: a) one b) two c) three"))
        assert verdict.format is DocumentFormat.MCQ
        assert verdict.confidence == 0.8

    def test_keyword_when_true_and_false_words_then_true_false(self):
        """Both words true and false should suggest true-false."""
        verdict = content_keyword(DetectionInput.build("Say whether each is true or false."))
        assert verdict.format is DocumentFormat.TRUE_FALSE
        assert verdict.confidence == 0.7


class TestSelectBest:
    """Tests for select_best."""

    def test_select_when_equal_confidence_then_earlier_strategy(self):
        """Ties should go to the earlier strategy."""
        verdicts = [
            StrategyVerdict(CONTENT_KEYWORD, DocumentFormat.TRUE_FALSE, 0.75),
            StrategyVerdict(TEMPLATE, DocumentFormat.MCQ, 0.75),
            StrategyVerdict(PATTERN_FREQUENCY, DocumentFormat.MIXED, 0.75),
        ]
        assert select_best(verdicts).strategy == PATTERN_FREQUENCY

    def test_select_when_higher_confidence_later_then_higher_wins(self):
        """Confidence should outrank order."""
        verdicts = [
            StrategyVerdict(PATTERN_FREQUENCY, DocumentFormat.SHORT_ANSWER, 0.7),
            StrategyVerdict(STATISTICAL, DocumentFormat.MCQ, 0.8),
        ]
        assert select_best(verdicts).format is DocumentFormat.MCQ

    def test_select_when_all_unknown_then_unknown_zero(self):
        """Nothing above zero should give unknown."""
        verdicts = [
            StrategyVerdict(PATTERN_FREQUENCY, DocumentFormat.UNKNOWN, 0.0),
            StrategyVerdict(TEMPLATE, DocumentFormat.MCQ, 0.0),
        ]
        best = select_best(verdicts)
        assert best.format is DocumentFormat.UNKNOWN
        assert best.confidence == 0.0
        assert best.strategy == ""
