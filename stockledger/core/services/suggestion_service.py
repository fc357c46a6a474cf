"""
AI suggestion service.

Asks the LLM for an item description, a category or a market price. The
ledger never depends on it: every failure surfaces as
SuggestionUnavailableError and callers fall back to manual input.
NO infrastructure imports - depends only on core entities, interfaces, exceptions.
"""

import json
import math
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stockledger.config import get_logger
from stockledger.core.entities.suggestion import (
    CategorySuggestion,
    DescriptionSuggestion,
    PriceSuggestion,
)
from stockledger.core.exceptions import LLMError, SuggestionUnavailableError
from stockledger.core.interfaces import ILLMProvider

logger = get_logger(__name__)

DESCRIPTION_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 50
PRICE_TEMPERATURE = 0.3
UNPARSEABLE_PRICE_NOTE = "The model returned a price in an unexpected format."

DESCRIPTION_SYSTEM_PROMPT = """You are a marketing copywriter for inventory catalogs.
Write concise, appealing item descriptions of one or two sentences that highlight
the main features or uses. Skip openers like "This item is...". Get straight to the point.
Respond with a JSON object only: {"description": "..."}"""

CATEGORY_SYSTEM_PROMPT = """You organize inventories.
Suggest one short, common category for the item, such as "Electronics",
"Stationery", "Tools" or "Food". Use one to three words.
Respond with a JSON object only: {"suggested_category": "..."}"""

PRICE_SYSTEM_PROMPT = """You are a market pricing and e-commerce expert.
Suggest a competitive retail price in USD based on the product type, features,
likely audience and prices of similar items.
Respond with a JSON object only, the price as a plain number without currency symbols:
{"suggested_price": 49.99, "reasoning": "Based on similar products."}
If you cannot determine a reasonable price, omit the price:
{"reasoning": "Not enough information to determine a price."}"""


def _item_prompt(name: str, description: str | None = None, category: str | None = None) -> str:
    lines = [f"Item name: {name}"]
    if description:
        lines.append(f"Description: {description}")
    if category:
        lines.append(f"Category: {category}")
    return "\n".join(lines)


class SuggestionService:
    """
    LLM-backed suggestions for the item form.

    Required interfaces for DI:
    - ILLMProvider: Optional; without one every suggestion is unavailable
    """

    def __init__(self, llm_provider: ILLMProvider | None = None):
        self._llm = llm_provider

    @property
    def enabled(self) -> bool:
        return self._llm is not None

    async def generate_description(
        self,
        name: str,
        category: str | None = None,
    ) -> DescriptionSuggestion:
        """Generate a 1-2 sentence description for an item."""
        data = await self._ask(
            "description",
            _item_prompt(name, category=category),
            DESCRIPTION_SYSTEM_PROMPT,
        )
        if isinstance(data.get("description"), str):
            data["description"] = data["description"].strip()[:DESCRIPTION_MAX_LENGTH]
        return self._validate("description", DescriptionSuggestion, data)

    async def suggest_category(
        self,
        name: str,
        description: str | None = None,
    ) -> CategorySuggestion:
        """Suggest a short category for an item."""
        data = await self._ask(
            "category",
            _item_prompt(name, description=description),
            CATEGORY_SYSTEM_PROMPT,
        )
        if isinstance(data.get("suggested_category"), str):
            data["suggested_category"] = data["suggested_category"].strip()[:CATEGORY_MAX_LENGTH]
        return self._validate("category", CategorySuggestion, data)

    async def suggest_price(
        self,
        name: str,
        description: str | None = None,
        category: str | None = None,
    ) -> PriceSuggestion:
        """
        Suggest a market price.

        A price the model returns in a non-numeric form is dropped and a
        note is put in ``reasoning`` instead.
        """
        data = await self._ask(
            "price",
            _item_prompt(name, description=description, category=category),
            PRICE_SYSTEM_PROMPT,
            temperature=PRICE_TEMPERATURE,
        )

        raw_price = data.get("suggested_price")
        if raw_price is not None:
            try:
                price = float(raw_price)
            except (TypeError, ValueError):
                price = None
            if price is None or not math.isfinite(price) or price < 0:
                logger.warning("price_suggestion_unparseable", raw_price=str(raw_price)[:50])
                data["suggested_price"] = None
                if not data.get("reasoning"):
                    data["reasoning"] = UNPARSEABLE_PRICE_NOTE
            else:
                data["suggested_price"] = price

        return self._validate("price", PriceSuggestion, data)

    async def _ask(
        self,
        kind: str,
        prompt: str,
        system_prompt: str,
        temperature: float | None = None,
    ) -> dict[str, Any]:
        if self._llm is None:
            raise SuggestionUnavailableError(kind, "no LLM provider configured")

        try:
            response = await self._llm.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                temperature=temperature,
                json_mode=True,
            )
        except LLMError as e:
            logger.warning("suggestion_llm_failed", kind=kind, error=str(e))
            raise SuggestionUnavailableError(kind, e.message) from e

        if response.error or not response.text.strip():
            raise SuggestionUnavailableError(kind, response.error or "empty response")

        json_str = self._extract_json_string(response.text)
        if not json_str:
            raise SuggestionUnavailableError(kind, "no JSON object in response")
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise SuggestionUnavailableError(kind, f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise SuggestionUnavailableError(kind, "response is not a JSON object")

        logger.info("suggestion_generated", kind=kind, model=response.model)
        return data

    @staticmethod
    def _extract_json_string(text: str) -> str | None:
        """Extract JSON string from LLM response text."""
        text = text.strip()

        if text.startswith("{"):
            return text

        match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
        if match:
            return match.group(1).strip()

        match = re.search(r"\{[\s\S]*\}", text)
        if match:
            return match.group(0)

        return None

    @staticmethod
    def _validate(kind: str, model: type, data: dict[str, Any]) -> Any:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
            raise SuggestionUnavailableError(kind, f"invalid fields: {fields}") from e
