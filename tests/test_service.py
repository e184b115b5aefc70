"""Tests for the rewrite and self-improve pipelines."""

import asyncio

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from prompt_rewriter.config.modes import get_mode
from prompt_rewriter.config.settings import Settings
from prompt_rewriter.errors import ErrorKind, ServiceError
from prompt_rewriter.rewrite.service import RewriteService, create_rewrite_service
from tests.mocks import FailingSearchProvider, MockChatModel, ProviderError


@pytest.mark.asyncio
async def test_rewrite_strips_prefix(make_service):
    service, llm = make_service(["Here is the rewritten prompt: You are an expert researcher..."])

    result = await service.rewrite("Explain quantum computing", "question-research")

    assert result.text == "You are an expert researcher..."
    assert result.mode == "question-research"
    assert result.mode_name == "Question/Research Mode"
    assert result.is_direct_content is False
    assert result.web_access_used is False
    assert result.sources == []

    call = llm.calls[0]
    assert call["temperature"] == 0.4
    assert call["max_tokens"] == 500
    system, user = call["messages"]
    assert isinstance(system, SystemMessage)
    assert isinstance(user, HumanMessage)
    assert system.content == get_mode("question-research").system_instructions
    assert 'REWRITE THIS SPECIFIC PROMPT for Question/Research Mode:\n"Explain quantum computing"' in user.content
    assert "Do not create generic examples." in user.content


@pytest.mark.asyncio
async def test_rewrite_without_web_access_does_not_search(make_service, search_provider):
    service, _ = make_service(["You are an expert."])

    await service.rewrite("Explain quantum computing", "coding-agent")

    assert search_provider.queries == []


@pytest.mark.asyncio
async def test_rewrite_with_web_access(make_service, search_provider):
    service, llm = make_service(["You are an expert on qubits."])

    result = await service.rewrite("Explain quantum computing", "question-research", web_access_requested=True)

    assert result.web_access_used is True
    assert result.sources == ["https://example.com/quantum", "https://example.com/hardware"]
    assert len(search_provider.queries) == 1
    user_message = llm.last_messages[1].content
    assert user_message.startswith("Context: Quantum Computing Explained: Quantum computers use qubits")
    assert "REWRITE THIS SPECIFIC PROMPT" in user_message


@pytest.mark.asyncio
async def test_content_generation_always_searches(make_service, search_provider):
    service, llm = make_service(["# Quantum computing\n\nQubits hold two states."])

    result = await service.rewrite("Write about quantum computing", "content-generation")

    assert result.is_direct_content is True
    assert result.web_access_used is True
    assert search_provider.queries
    call = llm.calls[0]
    assert call["temperature"] == 0.8
    assert call["max_tokens"] == 3000
    user_message = call["messages"][1].content
    assert user_message.startswith("Use this current information to enhance your content: ")
    assert user_message.endswith("Generate complete, publication-ready content for: Write about quantum computing")


@pytest.mark.asyncio
async def test_document_rewriting_frames_literal_input(make_service):
    service, llm = make_service(["Quarterly Report\n\nRevenue grew."], provider=None)

    result = await service.rewrite("revenue grew a lot this quarter", "document-rewriting")

    assert result.is_direct_content is True
    assert result.web_access_used is False
    assert llm.last_messages[1].content == (
        "Transform this content into a professional document:\n\nrevenue grew a lot this quarter"
    )


@pytest.mark.asyncio
async def test_search_failure_does_not_fail_rewrite(make_service):
    service, llm = make_service(["You are an expert."], provider=FailingSearchProvider())

    result = await service.rewrite("Explain quantum computing", "question-research", web_access_requested=True)

    assert result.text == "You are an expert."
    assert result.web_access_used is False
    assert result.sources == []
    assert llm.last_messages[1].content.startswith("REWRITE THIS SPECIFIC PROMPT")


@pytest.mark.asyncio
async def test_framework_duplicates_are_truncated(make_service):
    service, _ = make_service(["Role: A\n\nContext: B\n\nRole: A2\n\nContext: B2"])

    result = await service.rewrite("Plan a product launch", "framework-optimization")

    assert result.text == "Role: A\n\nContext: B"


@pytest.mark.asyncio
async def test_unknown_mode_makes_no_calls(make_service, search_provider):
    service, llm = make_service(["unused"])

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "no-such-mode", web_access_requested=True)

    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    assert llm.call_count == 0
    assert search_provider.queries == []


@pytest.mark.asyncio
@pytest.mark.parametrize("user_text", [None, "", "   ", 42, ["list"]])
async def test_invalid_text_is_rejected(make_service, user_text):
    service, llm = make_service(["unused"])

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite(user_text, "question-research")

    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    assert exc_info.value.detail == "userPrompt is required and must be a string"
    assert llm.call_count == 0


@pytest.mark.asyncio
async def test_over_budget_request_makes_no_calls(make_service, search_provider):
    small_window = Settings(_env_file=None, groq_api_key="gsk-test-key", search_provider="mock", max_context_tokens=100)
    service, llm = make_service(["unused"], service_settings=small_window)

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "question-research")

    assert exc_info.value.kind is ErrorKind.PAYLOAD_TOO_LARGE
    assert llm.call_count == 0


@pytest.mark.asyncio
async def test_missing_credential_is_misconfigured(make_service, search_provider):
    unconfigured = Settings(_env_file=None, llm_mode="live", groq_api_key="your-key-here", search_provider="mock")
    service, llm = make_service(["unused"], service_settings=unconfigured)

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "content-generation")

    assert exc_info.value.kind is ErrorKind.MISCONFIGURED
    assert llm.call_count == 0
    assert search_provider.queries == []


@pytest.mark.asyncio
async def test_service_without_model_is_misconfigured(settings):
    service = RewriteService(settings=settings, llm=None)

    with pytest.raises(ServiceError) as exc_info:
        await service.self_improve("Some output", "question-research")

    assert exc_info.value.kind is ErrorKind.MISCONFIGURED


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["", "   ", "Here is the rewritten prompt:"])
async def test_empty_reply_is_an_error(make_service, reply):
    service, _ = make_service([reply])

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "question-research")

    assert exc_info.value.kind is ErrorKind.EMPTY_RESPONSE


@pytest.mark.asyncio
async def test_rate_limit_is_retried_then_reported(make_service, recording_sleep):
    service, llm = make_service([ProviderError(429, "rate limit exceeded")])

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "question-research")

    assert exc_info.value.kind is ErrorKind.RATE_LIMITED
    assert llm.call_count == 3
    assert recording_sleep.delays == [2.0, 4.0]


@pytest.mark.asyncio
async def test_self_improve(make_service, search_provider):
    service, llm = make_service(["Here is the improved version: Explain qubits with one analogy."])

    result = await service.self_improve("Explain qubits.", "coding-agent")

    assert result.text == "Explain qubits with one analogy."
    assert result.mode == "coding-agent"
    assert result.mode_name == "Coding Agent Mode"
    assert search_provider.queries == []

    call = llm.calls[0]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 2000
    system, user = call["messages"]
    assert system.content == get_mode("coding-agent").improve_instructions
    assert "Current Output:\nExplain qubits." in user.content
    assert user.content.endswith("Provide only the improved version.")


@pytest.mark.asyncio
async def test_self_improve_rejects_missing_mode(make_service):
    service, llm = make_service(["unused"])

    with pytest.raises(ServiceError) as exc_info:
        await service.self_improve("Explain qubits.", None)

    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    assert llm.call_count == 0


@pytest.mark.asyncio
async def test_self_improve_rejects_empty_output(make_service):
    service, _ = make_service(["unused"])

    with pytest.raises(ServiceError) as exc_info:
        await service.self_improve("", "coding-agent")

    assert exc_info.value.detail == "currentOutput is required and must be a string"


@pytest.mark.asyncio
async def test_mock_mode_end_to_end():
    settings = Settings(_env_file=None, llm_mode="mock", search_provider="mock")
    service = create_rewrite_service(settings)

    result = await service.rewrite("Explain quantum computing", "question-research")
    framework = await service.rewrite("Plan a product launch", "framework-optimization")
    improved = await service.self_improve(result.text, "question-research")

    assert result.text == (
        "You are an expert assistant. Explain quantum computing. Explain your reasoning and cite sources."
    )
    assert framework.text.startswith("Role: ")
    assert "Context: The user asked: Plan a product launch" in framework.text
    assert improved.text == result.text


@pytest.mark.asyncio
async def test_concurrent_requests_do_not_interfere():
    service = create_rewrite_service(Settings(_env_file=None, llm_mode="mock", search_provider="mock"))

    plain, framework = await asyncio.gather(
        service.rewrite("Explain quantum computing", "question-research"),
        service.rewrite("Plan a product launch", "framework-optimization"),
    )

    assert plain.mode == "question-research"
    assert "Explain quantum computing" in plain.text
    assert framework.mode == "framework-optimization"
    assert framework.text.startswith("Role: ")


@pytest.mark.asyncio
async def test_credentials_added_after_startup_are_picked_up(recording_logger):
    unconfigured = Settings(_env_file=None, llm_mode="live", groq_api_key=None, search_provider="mock")
    configured = Settings(_env_file=None, llm_mode="live", groq_api_key="gsk-late-key", search_provider="mock")
    loaded = iter([unconfigured, configured])
    built = []

    def build_llm(settings):
        built.append(settings.groq_api_key)
        return MockChatModel(["You are an expert."])

    service = RewriteService(
        settings=unconfigured,
        llm=None,
        logger=recording_logger,
        llm_factory=build_llm,
        settings_loader=lambda: next(loaded),
    )

    with pytest.raises(ServiceError) as exc_info:
        await service.rewrite("Explain quantum computing", "question-research")
    assert exc_info.value.kind is ErrorKind.MISCONFIGURED

    first = await service.rewrite("Explain quantum computing", "question-research")
    second = await service.rewrite("Explain quantum computing", "coding-agent")

    assert first.text == "You are an expert."
    assert second.text == "You are an expert."
    assert built == ["gsk-late-key"]
    assert len(recording_logger.events("completion_provider_configured")) == 1
