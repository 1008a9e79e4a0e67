import asyncio
import logging

from domain.errors import EMPTY_DESCRIPTION_MESSAGE, INVALID_FORMAT_MESSAGE
from proposal_controller import (
    CLEANING_MESSAGE,
    RESEARCHING_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    ProposalController,
)
from proposal_renderer import DEFAULT_LOADING_MESSAGE, ResultsRenderer
from proposal_state_manager import GroundingCitation, OutlineResponse

OUTLINE_TEXT = '{"painPoints":["A","B"],"proposedSolution":"S","recommendedTech":["X"]}'


class FakeSummarizer:
    def __init__(self, result="cleaned", error=None, gate=None):
        self.calls = []
        self._result = result
        self._error = error
        self._gate = gate

    async def summarize(self, project_description):
        self.calls.append(project_description)
        if self._gate is not None:
            await self._gate.wait()
        if self._error is not None:
            raise self._error
        return self._result


class FakeOutlineGenerator:
    def __init__(self, text=OUTLINE_TEXT, citations=None, error=None):
        self.calls = []
        self._response = OutlineResponse(text=text, citations=list(citations or []))
        self._error = error

    async def generate(self, cleaned_description):
        self.calls.append(cleaned_description)
        if self._error is not None:
            raise self._error
        return self._response


def _controller(summarizer=None, outline_generator=None):
    renderer = ResultsRenderer()
    history = []
    renderer.bind(lambda view: history.append((view.loading, view.loading_message)))
    controller = ProposalController(
        summarizer=summarizer or FakeSummarizer(),
        outline_generator=outline_generator or FakeOutlineGenerator(),
        renderer=renderer,
    )
    return controller, renderer, history


def test_successful_run_renders_results_and_releases_busy_flag():
    summarizer = FakeSummarizer(result="core requirements")
    generator = FakeOutlineGenerator(citations=[GroundingCitation(uri="https://e.com", title="E")])
    controller, renderer, history = _controller(summarizer, generator)

    asyncio.run(controller.handle_generate("  Hello! I need a chatbot.  "))

    assert summarizer.calls == ["Hello! I need a chatbot."]
    assert generator.calls == ["core requirements"]
    assert controller.busy is False
    assert renderer.view.is_error is False
    assert "pain-points" in renderer.view.html
    assert "sources-section" in renderer.view.html
    assert (True, CLEANING_MESSAGE) in history
    assert (True, RESEARCHING_MESSAGE) in history
    assert history[-1] == (False, DEFAULT_LOADING_MESSAGE)
    assert renderer.view.loading is False


def test_busy_flag_is_true_only_while_in_flight():
    observed = []

    class ObservingSummarizer(FakeSummarizer):
        async def summarize(self, project_description):
            observed.append(controller.busy)
            return await super().summarize(project_description)

    controller, _, _ = _controller(summarizer=ObservingSummarizer())
    assert controller.busy is False
    asyncio.run(controller.handle_generate("build me a site"))
    assert observed == [True]
    assert controller.busy is False


def test_trigger_while_busy_is_dropped():
    async def scenario():
        gate = asyncio.Event()
        summarizer = FakeSummarizer(gate=gate)
        generator = FakeOutlineGenerator()
        controller, _, _ = _controller(summarizer, generator)

        first = asyncio.create_task(controller.handle_generate("first"))
        await asyncio.sleep(0)
        assert controller.busy is True

        await controller.handle_generate("second")
        assert summarizer.calls == ["first"]

        gate.set()
        await first
        return controller, summarizer, generator

    controller, summarizer, generator = asyncio.run(scenario())
    assert summarizer.calls == ["first"]
    assert generator.calls == ["cleaned"]
    assert controller.busy is False


def test_empty_description_makes_no_remote_calls():
    summarizer = FakeSummarizer()
    generator = FakeOutlineGenerator()
    controller, renderer, history = _controller(summarizer, generator)

    for value in ("", "   \n\t", None):
        asyncio.run(controller.handle_generate(value))

    assert summarizer.calls == []
    assert generator.calls == []
    assert renderer.view.is_error is True
    assert renderer.view.html == f"<p>{EMPTY_DESCRIPTION_MESSAGE}</p>"
    assert all(loading is False for loading, _ in history)


def test_summarizer_failure_skips_outline_stage():
    summarizer = FakeSummarizer(error=ConnectionError("quota exceeded"))
    generator = FakeOutlineGenerator()
    controller, renderer, _ = _controller(summarizer, generator)

    asyncio.run(controller.handle_generate("something"))

    assert generator.calls == []
    assert renderer.view.is_error is True
    assert "An error occurred while generating the outline: quota exceeded" in renderer.view.html
    assert controller.busy is False
    assert renderer.view.loading is False


def test_error_without_message_uses_fallback():
    controller, renderer, _ = _controller(summarizer=FakeSummarizer(error=RuntimeError()))
    asyncio.run(controller.handle_generate("something"))
    assert UNKNOWN_ERROR_MESSAGE in renderer.view.html


def test_outline_failure_is_reported():
    generator = FakeOutlineGenerator(error=TimeoutError("deadline exceeded"))
    controller, renderer, _ = _controller(outline_generator=generator)
    asyncio.run(controller.handle_generate("something"))
    assert renderer.view.is_error is True
    assert "deadline exceeded" in renderer.view.html


def test_malformed_outline_reports_format_error_without_sections():
    generator = FakeOutlineGenerator(text='{"painPoints": [')
    controller, renderer, _ = _controller(outline_generator=generator)

    asyncio.run(controller.handle_generate("something"))

    assert renderer.view.is_error is True
    assert INVALID_FORMAT_MESSAGE in renderer.view.html
    assert "result-section" not in renderer.view.html
    assert controller.busy is False


def test_fenced_outline_renders():
    generator = FakeOutlineGenerator(text="```json\n" + OUTLINE_TEXT + "\n```")
    controller, renderer, _ = _controller(outline_generator=generator)
    asyncio.run(controller.handle_generate("something"))
    assert renderer.view.is_error is False
    assert "<p>S</p>" in renderer.view.html


def test_controller_can_run_again_after_failure():
    summarizer = FakeSummarizer(error=RuntimeError("first failure"))
    controller, renderer, _ = _controller(summarizer=summarizer)
    asyncio.run(controller.handle_generate("something"))
    assert renderer.view.is_error is True

    summarizer._error = None
    asyncio.run(controller.handle_generate("something"))
    assert renderer.view.is_error is False
    assert len(summarizer.calls) == 2


def test_empty_outline_logs_warning_and_renders_no_sections(caplog):
    generator = FakeOutlineGenerator(text='{"painPoints": "oops"}')
    controller, renderer, _ = _controller(outline_generator=generator)

    with caplog.at_level(logging.WARNING, logger="proposal_controller"):
        asyncio.run(controller.handle_generate("something"))

    assert renderer.view.is_error is False
    assert renderer.view.html == ""
    assert "no renderable fields" in caplog.text
