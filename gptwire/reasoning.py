"""Parameter checks for reasoning-model (o-series) chat requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_REASONING_PREFIXES = ("o1", "o3")


class ReasoningModelError(ValueError):
    """A request parameter is not allowed for a reasoning model."""

    default_message = "this model does not accept these parameters"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MaxTokensDeprecatedError(ReasoningModelError):
    """``max_tokens`` was set; reasoning models use ``max_completion_tokens``."""

    default_message = "this model is not supported MaxTokens, please use MaxCompletionTokens"


class LogprobsNotSupportedError(ReasoningModelError):
    """``logprobs`` was requested."""

    default_message = "this model has beta-limitations, logprobs not supported"


class FixedSamplingParametersError(ReasoningModelError):
    """A sampling parameter was set to something other than its fixed value."""

    default_message = (
        "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
        "while presence_penalty and frequency_penalty are fixed at 0"
    )


def _field(request: Any, name: str, default: Any) -> Any:
    if isinstance(request, Mapping):
        value = request.get(name, default)
    else:
        value = getattr(request, name, default)
    return default if value is None else value


class ReasoningValidator:
    """Rejects chat requests that o-series models cannot serve.

    The request may be a mapping or any object with the attributes
    ``model``, ``max_tokens``, ``logprobs``, ``temperature``, ``top_p``,
    ``n``, ``presence_penalty`` and ``frequency_penalty``.
    """

    def validate(self, request: Any) -> None:
        """Raise a :class:`ReasoningModelError` if the request is not allowed."""
        model = str(_field(request, "model", ""))
        if not model.startswith(_REASONING_PREFIXES):
            return
        self._validate_params(request)

    @staticmethod
    def _validate_params(request: Any) -> None:
        if _field(request, "max_tokens", 0) > 0:
            raise MaxTokensDeprecatedError()
        if _field(request, "logprobs", False):
            raise LogprobsNotSupportedError()
        for name in ("temperature", "top_p", "n"):
            value = _field(request, name, 0)
            if value > 0 and value != 1:
                raise FixedSamplingParametersError()
        for name in ("presence_penalty", "frequency_penalty"):
            if _field(request, name, 0) > 0:
                raise FixedSamplingParametersError()