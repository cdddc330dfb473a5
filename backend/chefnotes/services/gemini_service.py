"""
ChefNotes Backend — Google Gemini Service Implementation
==========================================================

What:  LLMService implementation backed by the Google Gemini API.
Why:   Gemini turns a handful of kitchen voice notes into a clean recipe quickly
       and has a free tier that covers single-user use.
How:   One GenerativeModel per system instruction, one generate_content_async
       call per request, failures wrapped in LLMServiceError.
Who:   Instantiated once at import; used by RecipeSynthesizer.

Call policy:
    A conversion is a single model call. No retry and no client-side timeout
    are added here: the SDK's own transport limits apply, and the client can
    simply press "convert" again, which re-aggregates from scratch.
"""

import logging
import time
import uuid
from typing import Dict

import google.generativeai as genai

from chefnotes.config import settings
from chefnotes.exceptions import LLMServiceError
from chefnotes.services.llm_base import LLMService

logger = logging.getLogger(__name__)


class GeminiService(LLMService):
    """
    Google Gemini implementation of the generation capability.

    Models are cached per system instruction: the SDK binds the system
    instruction at model construction, and the app only ever uses one.
    """

    def __init__(self):
        # The SDK keeps auth in module-level state
        if settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here":
            genai.configure(api_key=settings.gemini_api_key)

        self.model_name = settings.gemini_model
        self._models: Dict[str, "genai.GenerativeModel"] = {}

        logger.info("GeminiService initialized with model=%s", self.model_name)

    def _model_for(self, system_instruction: str) -> "genai.GenerativeModel":
        model = self._models.get(system_instruction)
        if model is None:
            model = genai.GenerativeModel(
                self.model_name,
                system_instruction=system_instruction,
            )
            self._models[system_instruction] = model
        return model

    async def generate(self, system_instruction: str, prompt: str) -> str:
        """
        Send one prompt to Gemini and return the generated text.

        Raises:
            LLMServiceError: Any SDK, API or network failure.
        """
        # Short per-call id to correlate the start/finish log lines
        call_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        logger.info(
            "[%s] Gemini generate: model=%s, prompt=%d chars",
            call_id,
            self.model_name,
            len(prompt),
        )

        try:
            response = await self._model_for(system_instruction).generate_content_async(prompt)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                message="The AI recipe service failed to respond.",
                context={"call_id": call_id, "error_type": type(e).__name__},
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        text = self._extract_text(response, call_id)

        logger.info(
            "[%s] Gemini generate completed in %.0fms, %d chars",
            call_id,
            duration_ms,
            len(text),
        )
        return text

    @staticmethod
    def _extract_text(response, call_id: str) -> str:
        # response.text raises ValueError when no candidate carries text
        # (e.g. the prompt was blocked); that is a successful call with no output.
        try:
            return response.text or ""
        except ValueError as e:
            logger.warning("[%s] Gemini returned no text: %s", call_id, str(e))
            return ""

    async def health_check(self) -> bool:
        """
        Check if Gemini API is reachable by listing models (no token cost).
        """
        try:
            model_names = [m.name for m in genai.list_models()]
            target = f"models/{self.model_name}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


gemini_service = GeminiService()
