"""Unit tests for classification, verification and their parsers."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from groundchat.fact_check import (
    GOOGLE_SEARCH_TOOL,
    Classification,
    GroundedVerifier,
    StatementClassifier,
    Verdict,
    VerificationOutcome,
    decide_outcome,
    extract_verification_text,
    parse_classification,
)
from groundchat.fact_check.models import (
    NO_RESPONSE_FALLBACK_TEXT,
    SKIPPED_OPINION_TEXT,
    TOOL_CALL_FALLBACK_TEXT,
    UNAVAILABLE_TEXT,
)
from groundchat.llm import Candidate, CandidatePart, FunctionCall, LLMResponse
from groundchat.prompts import load_prompt, render_prompt

SEARCH_CALL = FunctionCall(name="google_search", args={"query": "capital of Australia"})


class TestParseClassification:
    """Tests for parse_classification."""

    @pytest.mark.parametrize("raw", ["FACT", "fact", "  Fact.\n", "This is a FACT", "FACTUAL"])
    def test_fact_replies(self, raw):
        assert parse_classification(raw) is Classification.FACT

    @pytest.mark.parametrize("raw", ["OPINION", "opinion", "", None, "not sure"])
    def test_everything_else_is_opinion(self, raw):
        assert parse_classification(raw) is Classification.OPINION


class TestExtractVerificationText:
    """Tests for the extraction priority order."""

    def test_direct_text_is_trimmed(self):
        response = LLMResponse(text="  The capital is Canberra.  \n")

        assert extract_verification_text(response) == "The capital is Canberra."

    def test_direct_text_wins_over_function_calls(self):
        response = LLMResponse(text="CORRECT", function_calls=[SEARCH_CALL])

        assert extract_verification_text(response) == "CORRECT"

    def test_function_calls_join_candidate_text_parts(self):
        response = LLMResponse(
            function_calls=[SEARCH_CALL],
            candidates=[Candidate(parts=[
                CandidatePart(text="Actually,"),
                CandidatePart(text=None),
                CandidatePart(text="it is Canberra."),
            ])],
        )

        assert extract_verification_text(response) == "Actually, it is Canberra."

    def test_function_calls_without_text_use_fallback(self):
        response = LLMResponse(
            function_calls=[SEARCH_CALL],
            candidates=[Candidate(parts=[CandidatePart(text=None)])],
        )

        assert extract_verification_text(response) == TOOL_CALL_FALLBACK_TEXT

    def test_function_calls_without_candidates_use_fallback(self):
        response = LLMResponse(function_calls=[SEARCH_CALL])

        assert extract_verification_text(response) == TOOL_CALL_FALLBACK_TEXT

    def test_empty_response_uses_fallback(self):
        assert extract_verification_text(LLMResponse()) == NO_RESPONSE_FALLBACK_TEXT

    def test_whitespace_text_uses_fallback(self):
        assert extract_verification_text(LLMResponse(text="  \n ")) == NO_RESPONSE_FALLBACK_TEXT

    def test_whitespace_text_with_function_calls_uses_parts(self):
        response = LLMResponse(
            text=" ",
            function_calls=[SEARCH_CALL],
            candidates=[Candidate(parts=[CandidatePart(text="Actually, it is Canberra.")])],
        )

        assert extract_verification_text(response) == "Actually, it is Canberra."


class TestDecideOutcome:
    """Tests for mapping verification text to an outcome."""

    @pytest.mark.parametrize("text", ["CORRECT", "correct", "Correct"])
    def test_correct_token_in_any_case(self, text):
        assert decide_outcome(text) == VerificationOutcome.confirmed()

    def test_statement_is_correct_phrase(self):
        outcome = decide_outcome("The statement is correct because Canberra is the capital.")

        assert outcome.verdict is Verdict.CONFIRMED
        assert outcome.correction is None

    def test_this_is_accurate_phrase(self):
        assert decide_outcome("Yes, this is accurate.").verdict is Verdict.CONFIRMED

    def test_correct_inside_sentence_is_a_correction(self):
        outcome = decide_outcome("Not correct: it is Canberra.")

        assert outcome.verdict is Verdict.CORRECTED

    def test_correction_text_is_kept(self):
        outcome = decide_outcome("Actually, the capital is X, not Y.")

        assert outcome == VerificationOutcome.corrected("Actually, the capital is X, not Y.")
        assert outcome.correction == "Actually, the capital is X, not Y."

    @pytest.mark.parametrize("text", [TOOL_CALL_FALLBACK_TEXT, NO_RESPONSE_FALLBACK_TEXT])
    def test_fallbacks_are_inconclusive_but_shown(self, text):
        outcome = decide_outcome(text)

        assert outcome.verdict is Verdict.INCONCLUSIVE
        assert outcome.correction == text

    def test_custom_phrases(self):
        outcome = decide_outcome("Verified.", confirmation_phrases={"verified"})

        assert outcome.verdict is Verdict.CONFIRMED

    @given(st.text(), st.sampled_from(["the statement is correct", "this is accurate"]), st.text())
    def test_confirmation_phrase_anywhere(self, prefix, phrase, suffix):
        """Property test: a confirmation phrase anywhere means no correction."""
        text = f"{prefix}{phrase.upper()}{suffix}"
        assert decide_outcome(text).needs_correction is False


class TestVerificationOutcome:
    """Tests for the outcome value type."""

    def test_skipped_keeps_opinion_text(self):
        outcome = VerificationOutcome.skipped()

        assert outcome.verdict is Verdict.SKIPPED
        assert outcome.correction == SKIPPED_OPINION_TEXT

    def test_unavailable_keeps_service_text(self):
        assert VerificationOutcome.unavailable().correction == UNAVAILABLE_TEXT


class TestPrompts:
    """Tests for the packaged prompt files."""

    def test_classify_prompt_embeds_text(self):
        prompt = render_prompt("classify", text="The sky is green.")

        assert "'FACT' or 'OPINION'" in prompt
        assert prompt.endswith('Text: "The sky is green."')

    def test_braces_in_values_are_left_alone(self):
        prompt = render_prompt("verify", statement="set {a, b}")

        assert 'Statement to verify: "set {a, b}"' in prompt

    def test_unknown_prompt_raises(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")


class TestStatementClassifier:
    """Tests for StatementClassifier."""

    @pytest.mark.asyncio
    async def test_fact_reply(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text=" fact \n")

        result = await StatementClassifier(fake_llm).classify("Water boils at 100C.")

        assert result is Classification.FACT
        prompt = fake_llm.generate_content.await_args.args[0]
        assert 'Text: "Water boils at 100C."' in prompt

    @pytest.mark.asyncio
    async def test_opinion_reply(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="OPINION")

        result = await StatementClassifier(fake_llm).classify("Blue is the best color.")

        assert result is Classification.OPINION

    @pytest.mark.asyncio
    async def test_backend_failure_defaults_to_opinion(self, fake_llm):
        fake_llm.generate_content.side_effect = ConnectionError("network down")

        result = await StatementClassifier(fake_llm).classify("Water boils at 100C.")

        assert result is Classification.OPINION

    @pytest.mark.asyncio
    async def test_missing_text_defaults_to_opinion(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(function_calls=[SEARCH_CALL])

        result = await StatementClassifier(fake_llm).classify("Water boils at 100C.")

        assert result is Classification.OPINION

    @pytest.mark.asyncio
    async def test_model_override_is_forwarded(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="FACT")

        await StatementClassifier(fake_llm, model="gemini-2.5-pro").classify("x")

        assert fake_llm.generate_content.await_args.kwargs["model"] == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_prompt_override_is_used(self, fake_llm, prompt_dir):
        (prompt_dir / "classify.txt").write_text("Label this: {text}", encoding="utf-8")
        fake_llm.generate_content.return_value = LLMResponse(text="FACT")

        result = await StatementClassifier(fake_llm).classify("Water boils at 100C.")

        assert result is Classification.FACT
        assert fake_llm.generate_content.await_args.args[0] == "Label this: Water boils at 100C."

    @pytest.mark.asyncio
    async def test_malformed_prompt_override_defaults_to_opinion(self, fake_llm, prompt_dir):
        (prompt_dir / "classify.txt").write_text('Answer as {"label": ...}: {text}', encoding="utf-8")
        fake_llm.generate_content.return_value = LLMResponse(text="FACT")

        result = await StatementClassifier(fake_llm).classify("Water boils at 100C.")

        assert result is Classification.OPINION
        fake_llm.generate_content.assert_not_awaited()


class TestGroundedVerifier:
    """Tests for GroundedVerifier."""

    @pytest.mark.asyncio
    async def test_request_declares_search_tool_and_system_instruction(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="CORRECT")

        await GroundedVerifier(fake_llm).verify("Canberra is the capital of Australia.")

        call = fake_llm.generate_content.await_args
        assert 'Statement to verify: "Canberra is the capital of Australia."' in call.args[0]
        assert call.kwargs["tools"] == [GOOGLE_SEARCH_TOOL]
        assert "Never ask for more information" in call.kwargs["system_instruction"]

    def test_search_tool_declaration(self):
        assert GOOGLE_SEARCH_TOOL.name == "google_search"
        assert GOOGLE_SEARCH_TOOL.parameters["required"] == ["query"]
        assert GOOGLE_SEARCH_TOOL.parameters["properties"]["query"]["type"] == "string"

    @pytest.mark.asyncio
    async def test_confirmed(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="correct")

        outcome = await GroundedVerifier(fake_llm).verify("Canberra is the capital.")

        assert outcome.verdict is Verdict.CONFIRMED

    @pytest.mark.asyncio
    async def test_corrected(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(
            text="The sky is blue, not green, due to Rayleigh scattering."
        )

        outcome = await GroundedVerifier(fake_llm).verify("The sky is green.")

        assert outcome == VerificationOutcome.corrected(
            "The sky is blue, not green, due to Rayleigh scattering."
        )

    @pytest.mark.asyncio
    async def test_tool_call_only_is_inconclusive(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(function_calls=[SEARCH_CALL])

        outcome = await GroundedVerifier(fake_llm).verify("The sky is green.")

        assert outcome == VerificationOutcome.inconclusive(TOOL_CALL_FALLBACK_TEXT)

    @pytest.mark.asyncio
    async def test_blank_reply_is_inconclusive(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="   ")

        outcome = await GroundedVerifier(fake_llm).verify("The sky is green.")

        assert outcome == VerificationOutcome.inconclusive(NO_RESPONSE_FALLBACK_TEXT)

    @pytest.mark.asyncio
    async def test_backend_failure_is_unavailable(self, fake_llm):
        fake_llm.generate_content.side_effect = TimeoutError()

        outcome = await GroundedVerifier(fake_llm).verify("The sky is green.")

        assert outcome.verdict is Verdict.UNAVAILABLE
        assert outcome.correction == "Fact-check service is currently unavailable."

    @pytest.mark.asyncio
    async def test_custom_confirmation_phrases(self, fake_llm):
        fake_llm.generate_content.return_value = LLMResponse(text="Claim VERIFIED by sources.")

        verifier = GroundedVerifier(fake_llm, confirmation_phrases=["Claim verified"])
        outcome = await verifier.verify("x")

        assert outcome.verdict is Verdict.CONFIRMED
