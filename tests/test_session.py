"""Lesson session tests: answering, scoring, pronunciation and completion."""

import asyncio

import pytest

from bhashapath.classroom import LessonLoader, LessonSession, ProgressAccessor
from bhashapath.schemas import LessonContent
from bhashapath.speech import AudioService, SpeechRecognizer

from conftest import FirstChoice, LastChoice


class FakeTimer:
    def __init__(self, start=1000.0):
        self.value = start

    def __call__(self):
        return self.value


@pytest.fixture
def lesson():
    return LessonLoader().get_lesson("lesson-6")


@pytest.fixture
def timer():
    return FakeTimer()


def make_session(lesson, store, speaker, timer, rng=None):
    recognizer = SpeechRecognizer(speaker, delay=0.01, rng=rng or FirstChoice())
    return LessonSession(
        lesson,
        ProgressAccessor(store),
        AudioService(speaker),
        recognizer,
        timer=timer,
    )


async def answer(session, text):
    session.select_answer(text)
    return await session.submit_answer()


async def pronounce(session):
    await session.start_pronunciation()
    await asyncio.sleep(0.05)
    await session.wait_for_cues()
    return await session.submit_answer()


class TestAnswering:

    @pytest.mark.asyncio
    async def test_submit_without_selection(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        assert await session.submit_answer() is None
        assert session.show_result is False
        assert speaker.spoken == []

    @pytest.mark.asyncio
    async def test_correct_answer_plays_success(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        assert await answer(session, "नमस्कार") is True
        assert session.correct == 1
        assert session.show_result is True
        assert speaker.texts == ["Correct!"]

    @pytest.mark.asyncio
    async def test_wrong_answer_plays_error(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        assert await answer(session, "चला") is False
        assert session.correct == 0
        assert speaker.texts == ["Try again"]

    @pytest.mark.asyncio
    async def test_second_submit_is_ignored(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        assert await answer(session, "नमस्कार") is True
        assert await session.submit_answer() is None
        assert await session.submit_answer() is None
        assert session.correct == 1
        assert speaker.texts == ["Correct!"]

    @pytest.mark.asyncio
    async def test_selection_locked_after_submit(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        assert await answer(session, "चला") is False
        assert await answer(session, "नमस्कार") is None
        assert session.selected_answer == "चला"
        assert session.correct == 0

    @pytest.mark.asyncio
    async def test_advance_without_submitting(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        session.select_answer("नमस्कार")

        assert await session.next_question() is None
        assert session.index == 1
        assert session.correct == 0
        assert speaker.spoken == []

    @pytest.mark.asyncio
    async def test_next_resets_question_state(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        await answer(session, "नमस्कार")

        assert await session.next_question() is None
        assert session.index == 1
        assert session.selected_answer is None
        assert session.show_result is False
        assert session.progress_percent == 50.0

    @pytest.mark.asyncio
    async def test_play_audio_uses_lesson_language(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        await session.next_question()

        await session.play_audio()
        assert speaker.spoken == [("नमस्कार", "hi-IN", 1.0, 0.8)]


class TestPronunciation:

    @pytest.mark.asyncio
    async def test_recognized_answer_is_graded(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        await session.next_question()

        assert await pronounce(session) is True
        assert session.selected_answer == "namaskar"
        assert session.is_recording is False
        assert speaker.texts == ["Listening...", "Correct!", "Correct!"]

    @pytest.mark.asyncio
    async def test_misrecognized_answer_fails(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer, rng=LastChoice())
        await session.next_question()

        assert await pronounce(session) is False
        assert session.selected_answer == "hello"
        assert session.correct == 0

    @pytest.mark.asyncio
    async def test_toggle_stops_recording(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        await session.next_question()

        await session.toggle_pronunciation()
        assert session.is_recording is True
        await session.toggle_pronunciation()
        await asyncio.sleep(0.05)

        assert session.is_recording is False
        assert session.selected_answer is None

    @pytest.mark.asyncio
    async def test_ignored_on_choice_question(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)
        await session.start_pronunciation()
        assert session.is_recording is False
        assert speaker.spoken == []

    @pytest.mark.asyncio
    async def test_requires_recognizer(self, store, speaker, timer):
        lesson = LessonContent.model_validate({
            "lesson_id": "say-it",
            "title": "Say it",
            "questions": [{"type": "pronunciation", "question": "Say hi", "correct_answer": "namaste"}],
        })
        session = LessonSession(lesson, ProgressAccessor(store), AudioService(speaker), timer=timer)
        with pytest.raises(RuntimeError):
            await session.start_pronunciation()


class TestCompletion:

    @pytest.mark.asyncio
    async def test_full_lesson_records_progress(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        await answer(session, "नमस्कार")
        await session.next_question()
        await pronounce(session)
        await session.next_question()
        await answer(session, "Goodbye")
        await session.next_question()
        await answer(session, "निरोप")

        timer.value += 44.6
        summary = await session.next_question()

        assert summary.lesson_id == "lesson-6"
        assert summary.correct == 3
        assert summary.total == 4
        assert summary.final_score == 75.0
        assert summary.percent == 75
        assert summary.time_spent == 45
        assert session.finished

        record = session.accessor.progress
        assert record.completed_lessons == ["lesson-6"]
        assert record.total_xp == 750
        assert record.streak_days == 1

        results = await store.get_lesson_results()
        assert len(results) == 1
        assert results[0].score == 75.0
        assert results[0].time_spent == 45

    @pytest.mark.asyncio
    async def test_repeated_submits_cannot_exceed_full_score(self, lesson, store, speaker, timer):
        session = make_session(lesson, store, speaker, timer)

        session.select_answer("नमस्कार")
        for _ in range(5):
            await session.submit_answer()
        for _ in range(session.total):
            await session.next_question()

        assert session.summary.correct == 1
        assert session.summary.final_score == 25.0
        assert session.accessor.progress.total_xp == 250
        assert len(await store.get_lesson_results()) == 1

    @pytest.mark.asyncio
    async def test_cannot_advance_after_finish(self, store, speaker, timer):
        lesson = LessonContent.model_validate({
            "lesson_id": "one-question",
            "title": "One",
            "questions": [{
                "type": "vocabulary",
                "question": "Hello?",
                "options": ["नमस्ते", "धन्यवाद"],
                "correct_answer": "नमस्ते",
            }],
        })
        session = make_session(lesson, store, speaker, timer)
        await answer(session, "नमस्ते")

        summary = await session.next_question()
        assert summary.final_score == 100.0

        with pytest.raises(RuntimeError):
            await session.next_question()
