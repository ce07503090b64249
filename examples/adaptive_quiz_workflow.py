"""
Adaptive quiz workflow example: Load → Quiz → Summarize → Dashboard

Demonstrates end-to-end use of the quiz core:
1. Load the question dataset and show tier availability
2. Run a timed adaptive session with a simulated learner
3. Read the stored result back
4. Run a practice session on one tier
"""

import random
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tierquiz import AdaptiveQuiz, DifficultyTier, QuestionRepository, config, configure_logging
from tierquiz.evaluation.summary import ResultSummarizer
from tierquiz.models.session_state import TierPromoted
from tierquiz.utils.persistence import get_result_store
from tierquiz.utils.random_source import SeededRandomSource


def answer_like_a_learner(question, rng, skill=0.7):
    """Pick the right key with probability `skill`, otherwise a wrong one."""
    if rng.random() < skill:
        return question.correct_key
    wrong = [k for k in question.options if k != question.correct_key]
    return rng.choice(wrong)


def main():
    configure_logging()
    config.prepare_fs()
    problems = config.validate()
    if problems:
        for problem in problems:
            print(f"⚠ {problem}")
        return 1

    rng = random.Random(2024)

    # ==================== Step 1: Load Questions ====================
    print("=" * 60)
    print("STEP 1: Loading Question Dataset")
    print("=" * 60)

    repo = QuestionRepository.from_csv(random_source=SeededRandomSource(7))
    print(f"✓ {repo.load_report}")
    for tier, count in repo.count_by_difficulty().items():
        print(f"  {tier.value:<10} {count} question(s)")
    print()

    # ==================== Step 2: Adaptive Session ====================
    print("=" * 60)
    print("STEP 2: Adaptive Session")
    print("=" * 60)

    quiz = AdaptiveQuiz(repo, time_budget=120)
    quiz.subscribe(
        lambda e: print(f"  ↑ {e.from_tier.value} → {e.to_tier.value} ({e.cause})")
        if isinstance(e, TierPromoted)
        else None
    )
    print(f"✓ Created quiz session: {quiz.session_id}")

    while not quiz.is_completed:
        question = quiz.draw()
        if question is None:
            break
        feedback = quiz.submit_answer(answer_like_a_learner(question, rng))
        if feedback.is_correct:
            print(f"  [{question.difficulty.value}] {question.text} → ✓ Correct!")
        else:
            print(
                f"  [{question.difficulty.value}] {question.text} → ✗ Incorrect. "
                f"The correct answer was {feedback.correct_key.upper()}."
            )
        # Simulated thinking time plus the feedback pause
        for _ in range(rng.randint(3, 12) + int(config.quiz.feedback_delay_seconds)):
            if quiz.tick():
                break

    result = quiz.result
    print(f"\n✓ Session ended: {quiz.state.end_reason}")
    print(f"  Score: {result.correct}/{result.answered} ({result.accuracy}%)")
    print(f"  Level reached: {result.tier_reached.value}")
    print(f"  Time elapsed: {result.elapsed_seconds}s")
    print()

    # ==================== Step 3: Dashboard ====================
    print("=" * 60)
    print("STEP 3: Reading Stored Result")
    print("=" * 60)

    stored = get_result_store().load()
    print(f"✓ {get_result_store().path}")
    for key, value in (stored or {}).items():
        print(f"  {key}: {value}")
    print()

    # ==================== Step 4: Practice Session ====================
    print("=" * 60)
    print("STEP 4: Practice Session (Moderate)")
    print("=" * 60)

    practice = AdaptiveQuiz(
        repo,
        mode="practice",
        tier=DifficultyTier.MODERATE,
        summarizer=ResultSummarizer(),
    )
    while practice.draw() is not None:
        practice.submit_answer(answer_like_a_learner(practice.current_question, rng, skill=0.5))

    print(f"✓ Practice {practice.state.end_reason}: {practice.result.accuracy}% accuracy")
    return 0


if __name__ == "__main__":
    sys.exit(main())
