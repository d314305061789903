"""Tests for the quiz endpoints."""

from __future__ import annotations

from sfr_sdk.learning.models import (
    QuestionType,
    QuizAnswer,
    QuizAnswerRequest,
    QuizCreateRequest,
    QuizDifficulty,
    QuizQuestion,
    QuizStatus,
)

QUIZ = {
    "id": 5,
    "title": "基礎確認テスト",
    "difficulty": "EASY",
    "timeLimit": 600,
    "passingScore": 70,
    "questionCount": 2,
    "userAttempts": 1,
    "bestScore": 80,
}

RESULT = {
    "quizId": 5,
    "score": 50,
    "totalQuestions": 2,
    "correctAnswers": 1,
    "passed": False,
    "timeSpent": 120,
    "questionResults": [
        {"questionIndex": 0, "isCorrect": True, "userAnswer": "A"},
        {"questionIndex": 1, "isCorrect": False, "userAnswer": "C", "correctAnswer": "B"},
    ],
}

ANSWERS = QuizAnswerRequest(
    answers=[QuizAnswer(question_index=0, answer="A"), QuizAnswer(question_index=1, answer="C")]
)


class TestQuizAuthoring:
    def test_list(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes", {"quizzes": [QUIZ], "totalCount": 1})
        quizzes = run(lambda s: s.quiz.get_quizzes(7, status=QuizStatus.IN_PROGRESS))
        assert fake_api.last_params() == {"status": "IN_PROGRESS"}
        assert quizzes.total_count == 1
        assert quizzes.quizzes[0].best_score == 80

    def test_detail_keeps_questions(self, fake_api, run) -> None:
        questions = [{"question": "1+1?", "questionType": "SINGLE_CHOICE", "options": ["1", "2"]}]
        fake_api.add("GET", "/spaces/7/quizzes/5", {**QUIZ, "questions": questions})
        quiz = run(lambda s: s.quiz.get_quiz(7, 5))
        assert quiz.model_extra["questions"] == questions

    def test_create(self, fake_api, run) -> None:
        fake_api.add("POST", "/spaces/7/quizzes", QUIZ, status=201)
        request = QuizCreateRequest(
            title="基礎確認テスト",
            difficulty=QuizDifficulty.EASY,
            questions=[
                QuizQuestion(
                    question="1+1?",
                    question_type=QuestionType.SINGLE_CHOICE,
                    options=["1", "2"],
                    correct_answer="2",
                ),
            ],
            time_limit=600,
        )

        run(lambda s: s.quiz.create_quiz(7, request))

        assert fake_api.last_json() == {
            "title": "基礎確認テスト",
            "difficulty": "EASY",
            "questions": [
                {
                    "question": "1+1?",
                    "questionType": "SINGLE_CHOICE",
                    "options": ["1", "2"],
                    "correctAnswer": "2",
                },
            ],
            "timeLimit": 600,
        }

    def test_update_and_delete(self, fake_api, run) -> None:
        fake_api.add("PUT", "/spaces/7/quizzes/5", {**QUIZ, "title": "改訂版"})
        fake_api.add("DELETE", "/spaces/7/quizzes/5", None, status=204)

        quiz = run(lambda s: s.quiz.update_quiz(7, 5, {"title": "改訂版"}))
        run(lambda s: s.quiz.delete_quiz(7, 5))

        assert quiz.title == "改訂版"
        assert [r.method for r in fake_api.requests] == ["PUT", "DELETE"]


class TestQuizAttempts:
    def test_submit_answers(self, fake_api, run) -> None:
        fake_api.add("POST", "/spaces/7/quizzes/5/attempt", RESULT)
        result = run(lambda s: s.quiz.submit_quiz_answer(7, 5, ANSWERS))
        assert fake_api.last_json() == {
            "answers": [{"questionIndex": 0, "answer": "A"}, {"questionIndex": 1, "answer": "C"}],
        }
        assert result.passed is False
        assert result.question_results[1].correct_answer == "B"

    def test_latest_result(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes/5/results/latest", RESULT)
        assert run(lambda s: s.quiz.get_quiz_result(7, 5)).score == 50

    def test_specific_result(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes/5/results/42", RESULT)
        run(lambda s: s.quiz.get_quiz_result(7, 5, 42))
        assert fake_api.last.url.path.endswith("/results/42")

    def test_attempts(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes/5/attempts", [RESULT, {**RESULT, "score": 100}])
        attempts = run(lambda s: s.quiz.get_quiz_attempts(7, 5))
        assert [a.score for a in attempts] == [50, 100]

    def test_stats(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes/stats", {
            "totalQuizzes": 4,
            "completedQuizzes": 2,
            "averageScore": 75.0,
            "bestScores": [{"quizId": 5, "score": 80}],
        })
        stats = run(lambda s: s.quiz.get_quiz_stats(7, "u-1"))
        assert fake_api.last_params() == {"userId": "u-1"}
        assert stats.best_scores[0].quiz_id == 5

    def test_leaderboard_default_limit(self, fake_api, run) -> None:
        board = [{"userId": "u-1", "score": 100}]
        fake_api.add("GET", "/spaces/7/quizzes/5/leaderboard", board)
        assert run(lambda s: s.quiz.get_quiz_leaderboard(7, 5)) == board
        assert fake_api.last_params() == {"limit": "10"}


class TestPracticeAndDiscovery:
    def test_practice_session(self, fake_api, run) -> None:
        fake_api.add("POST", "/spaces/7/quizzes/5/practice", {"sessionId": "p-1", "questions": []})
        fake_api.add("POST", "/spaces/7/quizzes/5/practice/p-1/submit", {"feedback": []})

        session = run(lambda s: s.quiz.start_practice_mode(7, 5))
        feedback = run(lambda s: s.quiz.submit_practice_answer(7, 5, session["sessionId"], ANSWERS))

        assert feedback == {"feedback": []}
        assert fake_api.last_json()["answers"][0] == {"questionIndex": 0, "answer": "A"}

    def test_by_difficulty(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes", [QUIZ])
        quizzes = run(lambda s: s.quiz.get_quizzes_by_difficulty(7, QuizDifficulty.HARD))
        assert fake_api.last_params() == {"difficulty": "HARD"}
        assert quizzes[0].id == 5

    def test_recommended(self, fake_api, run) -> None:
        fake_api.add("GET", "/spaces/7/quizzes/recommended", [QUIZ])
        assert run(lambda s: s.quiz.get_recommended_quizzes(7))[0].title == "基礎確認テスト"
