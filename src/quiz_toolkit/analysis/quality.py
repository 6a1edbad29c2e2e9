"""
Module: analysis.quality

Purpose:
    Quality Analyzer. Scores questions on readability (Flesch Reading
    Ease), option-length balance and clarity, classifies difficulty and
    category by keyword votes, and aggregates quiz-level statistics and
    suggestions. Pure and deterministic; never mutates a question.

Key Functions:
    - analyze_question(): QuestionAnalysis for one question
    - analyze_quiz(): QuizAnalysis for a question set (safe when empty)
    - improvement_suggestions(): Analysis suggestions plus layout advice

Dependencies:
    - textstat: Flesch Reading Ease
    - statistics (std): Population standard deviation
    - .lexicons: Keyword lists

Used By:
    - extractor.pipeline: Annotates each extraction
    - cli: analyze subcommand
"""

from __future__ import annotations

import logging
import statistics
from collections import Counter
from typing import Sequence

import textstat

from quiz_toolkit.common.thresholds import QUALITY_THRESHOLDS, QualityThresholds
from quiz_toolkit.core.models import ExtractedQuestion, QuestionAnalysis, QuizAnalysis

from .lexicons import (
    ALL_NONE_PHRASES,
    CATCH_ALL_WORDS,
    CATEGORY_KEYWORDS,
    CONNECTIVE_WORDS,
    DEFAULT_CATEGORY,
    DIFFICULTY_KEYWORDS,
    DIFFICULTY_PRIORITY,
    NEGATIVE_WORDS,
    VAGUE_WORDS,
    distinct_hits,
    occurrences,
)

logger = logging.getLogger(__name__)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# ─────────────────────────────────────────────────────────────────────────────
# Component scores
# ─────────────────────────────────────────────────────────────────────────────

def readability_score(text: str) -> float:
    """Flesch Reading Ease, clamped to [0, 100]. Blank text scores 0."""
    if not text.strip():
        return 0.0
    return round(_clamp(textstat.flesch_reading_ease(text)), 2)


def option_balance_score(
    options: Sequence[str],
    thresholds: QualityThresholds = QUALITY_THRESHOLDS,
) -> float:
    """
    max(0, 100 - 2 * stddev(option lengths)) plus 10 for exactly four
    options, capped at 100. Fewer than two options scores 0.
    """
    if len(options) < 2:
        return 0.0
    spread = statistics.pstdev(len(o) for o in options)
    balance = max(0.0, 100 - spread * thresholds.balance_stddev_factor)
    bonus = thresholds.four_option_bonus if len(options) == 4 else 0.0
    return round(min(100.0, balance + bonus), 2)


def clarity_score(text: str, thresholds: QualityThresholds = QUALITY_THRESHOLDS) -> float:
    lowered = text.lower()
    score = 100
    score -= occurrences(lowered, VAGUE_WORDS) * thresholds.vague_word_penalty
    if len(text) > thresholds.long_text_chars:
        score -= thresholds.long_text_penalty
    if len(text) > thresholds.very_long_text_chars:
        score -= thresholds.long_text_penalty
    if len(text) < thresholds.short_text_chars:
        score -= thresholds.short_text_penalty
    score += occurrences(lowered, CONNECTIVE_WORDS) * thresholds.connective_bonus
    return float(_clamp(score))


def classify_difficulty(text: str) -> str:
    """
    Keyword vote over the difficulty lexicons.

    Most distinct hits wins; ties go hard > medium > easy; no hits is easy.
    """
    lowered = text.lower()
    votes = {level: distinct_hits(lowered, words) for level, words in DIFFICULTY_KEYWORDS.items()}
    best = max(votes.values())
    if best == 0:
        return "easy"
    return next(level for level in DIFFICULTY_PRIORITY if votes[level] == best)


def classify_category(text: str) -> str:
    """Category with the most distinct keyword hits; first listed wins ties."""
    lowered = text.lower()
    best_category = DEFAULT_CATEGORY
    best_score = 0
    for category, words in CATEGORY_KEYWORDS.items():
        score = distinct_hits(lowered, words)
        if score > best_score:
            best_category, best_score = category, score
    return best_category


# ─────────────────────────────────────────────────────────────────────────────
# Question analysis
# ─────────────────────────────────────────────────────────────────────────────

def _specific_checks(
    question: ExtractedQuestion,
    issues: list[str],
    suggestions: list[str],
    strengths: list[str],
    thresholds: QualityThresholds,
) -> None:
    text = question.text.lower()
    options = list(question.options or ())
    lowered_options = [o.lower() for o in options]

    if any(occurrences(o, CATCH_ALL_WORDS) for o in lowered_options):
        issues.append("Contains potentially obvious wrong answers")
        suggestions.append('Review options for "all of the above" or "none of the above" patterns')

    if occurrences(text, NEGATIVE_WORDS):
        issues.append("Negative question detected")
        suggestions.append("Consider rephrasing as a positive question for clarity")

    if any(phrase in o for o in lowered_options for phrase in ALL_NONE_PHRASES):
        issues.append('Contains "all/none of the above" options')
        suggestions.append("These options can make questions easier to guess")

    if len(options) >= 2:
        lengths = [len(o) for o in options]
        longest, shortest = max(lengths), min(lengths)
        if longest > 0 and (shortest == 0 or longest / shortest > thresholds.option_length_ratio):
            issues.append("Significant option length imbalance")
            suggestions.append("Make options more similar in length")

    if "?" in text:
        strengths.append("Question ends with proper punctuation")
    else:
        issues.append("Question lacks proper punctuation")
        suggestions.append("End questions with a question mark")

    if thresholds.good_length_min <= len(question.text) <= thresholds.good_length_max:
        strengths.append("Question length is appropriate")


def analyze_question(
    question: ExtractedQuestion,
    thresholds: QualityThresholds = QUALITY_THRESHOLDS,
) -> QuestionAnalysis:
    """
    Score one question.

    Composite score = 0.3 * readability + 0.4 * balance + 0.3 * clarity,
    rounded. Open questions (no options) score 0 on balance and get no
    balance issue or strength.

    Example:
        >>> q = ExtractedQuestion(id="q1", text="What is the capital of France?",
        ...                       options=("London", "Paris", "Berlin", "Madrid"),
        ...                       correct_answer="Paris")
        >>> analyze_question(q).difficulty
        'easy'
    """
    readability = readability_score(question.text)
    balance = option_balance_score(question.options or (), thresholds)
    clarity = clarity_score(question.text, thresholds)

    score = round(
        readability * thresholds.readability_weight
        + balance * thresholds.balance_weight
        + clarity * thresholds.clarity_weight
    )

    issues: list[str] = []
    suggestions: list[str] = []
    strengths: list[str] = []

    if readability < thresholds.low_score:
        issues.append("Question text is difficult to read")
        suggestions.append("Use simpler language and shorter sentences")
    elif readability > thresholds.high_score:
        strengths.append("Question is very readable")

    if question.options:
        if balance < thresholds.low_score:
            issues.append("Options are imbalanced")
            suggestions.append("Make options more similar in length and complexity")
        elif balance > thresholds.high_score:
            strengths.append("Options are well-balanced")

    if clarity < thresholds.low_score:
        issues.append("Question lacks clarity")
        suggestions.append("Make the question more specific and unambiguous")
    elif clarity > thresholds.high_score:
        strengths.append("Question is clear and specific")

    _specific_checks(question, issues, suggestions, strengths, thresholds)

    return QuestionAnalysis(
        question_id=question.id,
        score=int(_clamp(score)),
        difficulty=classify_difficulty(question.text),
        category=classify_category(question.text),
        readability_score=readability,
        option_balance_score=balance,
        clarity_score=clarity,
        issues=tuple(issues),
        suggestions=tuple(suggestions),
        strengths=tuple(strengths),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Quiz analysis
# ─────────────────────────────────────────────────────────────────────────────

def analyze_quiz(
    questions: Sequence[ExtractedQuestion],
    thresholds: QualityThresholds = QUALITY_THRESHOLDS,
) -> QuizAnalysis:
    """
    Aggregate analysis for a question set.

    Flags easy skew (>= 70%), hard skew (>= 50%), low average (< 60) and
    limited variety (< 3 categories). Issues shared by more than 30% of
    questions become suggestions. An empty set gives zero counts and no
    findings.
    """
    distribution = {"easy": 0, "medium": 0, "hard": 0}
    total = len(questions)
    if total == 0:
        return QuizAnalysis(total_questions=0, average_score=0, difficulty_distribution=distribution)

    analyses = [analyze_question(q, thresholds) for q in questions]
    for analysis in analyses:
        distribution[analysis.difficulty] += 1

    categories: dict[str, int] = {}
    for analysis in analyses:
        categories[analysis.category] = categories.get(analysis.category, 0) + 1

    mean = sum(a.score for a in analyses) / total

    suggestions: list[str] = []
    issues: list[str] = []
    strengths: list[str] = []

    if distribution["easy"] / total * 100 >= thresholds.easy_skew_percent:
        issues.append("Quiz is heavily weighted toward easy questions")
        suggestions.append("Consider adding more medium and hard questions for better assessment")

    if distribution["hard"] / total * 100 >= thresholds.hard_skew_percent:
        issues.append("Quiz is heavily weighted toward hard questions")
        suggestions.append("Consider adding more easy and medium questions for accessibility")

    if mean < thresholds.low_score:
        issues.append("Overall question quality is low")
        suggestions.append("Review and improve questions based on individual analysis")
    elif mean > thresholds.high_score:
        strengths.append("Overall question quality is high")

    if len(categories) < thresholds.min_categories:
        issues.append("Limited variety in question types")
        suggestions.append("Include more diverse question categories")
    else:
        strengths.append("Good variety in question types")

    issue_counts = Counter(issue for a in analyses for issue in a.issues)
    for issue, count in issue_counts.items():
        if count > total * thresholds.common_issue_fraction:
            suggestions.append(f"Address common issue: {issue} (appears in {count} questions)")

    logger.debug(f"Analyzed {total} questions: average {mean:.1f}, {distribution}")

    return QuizAnalysis(
        total_questions=total,
        average_score=round(mean),
        difficulty_distribution=distribution,
        category_distribution=categories,
        overall_suggestions=tuple(suggestions),
        quality_issues=tuple(issues),
        strengths=tuple(strengths),
    )


def improvement_suggestions(
    question: ExtractedQuestion,
    thresholds: QualityThresholds = QUALITY_THRESHOLDS,
) -> list[str]:
    """Analysis suggestions followed by option-count and length advice."""
    suggestions = list(analyze_question(question, thresholds).suggestions)

    if question.options:
        if len(question.options) < 4:
            suggestions.append("Consider adding more options for better assessment")
        if len(question.options) > 4:
            suggestions.append("Consider reducing to 4 options for optimal choice")

    if len(question.text) < thresholds.expand_below_chars:
        suggestions.append("Expand question to provide more context")

    if len(question.text) > thresholds.split_above_chars:
        suggestions.append("Consider breaking long question into multiple parts")

    return suggestions
