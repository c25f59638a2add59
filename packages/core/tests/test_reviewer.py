"""Tests for run_review orchestration."""

from unittest.mock import MagicMock

import pytest

from snipreview_core.errors import EmptyInputError, InvalidCredentialError, QuotaExceededError
from snipreview_core.models import Finding
from snipreview_core.providers.anthropic import AnthropicReviewer
from snipreview_core.providers.openai import OpenAIReviewer
from snipreview_core.reviewer import ReviewResult, _get_reviewer, run_review

FINDINGS = [Finding(type="bug", severity="high", message="Null deref", suggestion="Check for None")]


def _config(model="anthropic", anthropic_key="ant-key", openai_key=None):
    return {
        "model": model,
        "language": "python",
        "anthropic_api_key": anthropic_key,
        "openai_api_key": openai_key,
    }


def _reviewer(findings=FINDINGS):
    reviewer = MagicMock()
    reviewer.analyze.return_value = findings
    return reviewer


class TestRunReview:
    def test_returns_result_with_findings(self):
        reviewer = _reviewer()
        result = run_review("x = None\nx.y", "python", _config(), reviewer=reviewer)

        assert isinstance(result, ReviewResult)
        assert result.findings == FINDINGS
        assert result.code == "x = None\nx.y"
        assert result.language == "python"
        assert result.model == "anthropic"
        assert result.reviewed_at
        reviewer.analyze.assert_called_once_with("x = None\nx.y", "python")

    def test_missing_key_rejected_before_call(self):
        reviewer = _reviewer()
        with pytest.raises(InvalidCredentialError) as exc_info:
            run_review("x = 1", "python", _config(anthropic_key=None), reviewer=reviewer)
        assert "ANTHROPIC_API_KEY" in str(exc_info.value)
        reviewer.analyze.assert_not_called()

    def test_placeholder_key_rejected(self):
        reviewer = _reviewer()
        with pytest.raises(InvalidCredentialError):
            run_review("x = 1", "python", _config(anthropic_key="your_api_key_here"), reviewer=reviewer)
        reviewer.analyze.assert_not_called()

    def test_key_checked_for_selected_provider(self):
        reviewer = _reviewer()
        with pytest.raises(InvalidCredentialError) as exc_info:
            run_review("x = 1", "python", _config(model="openai"), reviewer=reviewer)
        assert "OPENAI_API_KEY" in str(exc_info.value)

    @pytest.mark.parametrize("code", ["", "   ", "\n\t\n"])
    def test_empty_code_rejected_before_call(self, code):
        reviewer = _reviewer()
        with pytest.raises(EmptyInputError):
            run_review(code, "python", _config(), reviewer=reviewer)
        reviewer.analyze.assert_not_called()

    def test_credential_checked_before_input(self):
        with pytest.raises(InvalidCredentialError):
            run_review("", "python", _config(anthropic_key=None), reviewer=_reviewer())

    def test_provider_errors_propagate(self):
        reviewer = MagicMock()
        reviewer.analyze.side_effect = QuotaExceededError("429")
        with pytest.raises(QuotaExceededError):
            run_review("x = 1", "python", _config(), reviewer=reviewer)

    def test_builds_reviewer_from_config(self, mocker):
        built = _reviewer()
        get_reviewer = mocker.patch("snipreview_core.reviewer._get_reviewer", return_value=built)

        run_review("x = 1", "python", _config())

        get_reviewer.assert_called_once()
        assert get_reviewer.call_args.args[1] == "ant-key"
        built.analyze.assert_called_once()


class TestGetReviewer:
    def test_anthropic(self, mocker):
        init = mocker.patch.object(AnthropicReviewer, "__init__", return_value=None)
        assert isinstance(_get_reviewer({"model": "anthropic"}, "k"), AnthropicReviewer)
        init.assert_called_once_with(api_key="k")

    def test_openai(self, mocker):
        mocker.patch.object(OpenAIReviewer, "__init__", return_value=None)
        assert isinstance(_get_reviewer({"model": "openai"}, "k"), OpenAIReviewer)

    def test_unknown_model_raises(self):
        with pytest.raises(ValueError):
            _get_reviewer({"model": "gemini"}, "k")
