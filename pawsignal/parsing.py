"""
Description Parser for captioning answers

Turns the raw text answer of the vision-captioning step into an
ObservationDescription. Handles markdown fences and surrounding prose, and
falls back to an all-undetermined description when no usable JSON is found.
"""

from typing import Optional, Dict, Any
from pydantic import ValidationError
import json
import re

from pawsignal.config import ObservationField, SPANISH_FIELD_ALIASES
from pawsignal.signals.schema import InterpretationResult, ObservationDescription
from pawsignal.utils.logging import logger

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

_KNOWN_KEYS = {f.value for f in ObservationField} | set(SPANISH_FIELD_ALIASES.values())


class DescriptionParser:
    """Parser for captioning output to ObservationDescription."""

    @staticmethod
    def parse_model_output(
        generated_text: str,
        strict: bool = False
    ) -> ObservationDescription:
        """Parse a captioning answer into a description.

        Args:
            generated_text: Raw text answer of the captioning model
            strict: If True, raise on parsing failure. If False, return the
                undetermined description.

        Returns:
            ObservationDescription

        Raises:
            ValueError: If strict=True and parsing fails
        """
        json_data = DescriptionParser._extract_json(generated_text or "")

        if json_data:
            try:
                return ObservationDescription.model_validate(json_data)
            except ValidationError as e:
                if strict:
                    raise ValueError(f"Failed to validate observation description: {e}")
                logger.warning(f"Captioning answer did not validate, using undetermined description: {e.error_count()} error(s)")

        if strict:
            raise ValueError("No valid JSON found in captioning answer")
        return ObservationDescription.undetermined()

    @staticmethod
    def _strip_fences(text: str) -> str:
        return _FENCE.sub("", text.strip()).strip()

    @staticmethod
    def _extract_json(text: str) -> Optional[Dict[str, Any]]:
        """Extract the first JSON object carrying at least one observation key.

        Args:
            text: Text potentially containing JSON

        Returns:
            Parsed JSON dictionary or None
        """
        cleaned = DescriptionParser._strip_fences(text)
        try:
            data = json.loads(cleaned)
            if isinstance(data, dict) and _KNOWN_KEYS & set(data):
                return data
        except json.JSONDecodeError:
            pass

        for match in re.finditer(r"\{[^{}]*\}", cleaned, re.DOTALL):
            try:
                data = json.loads(match.group())
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict) and _KNOWN_KEYS & set(data):
                return data

        return None


def format_report(
    result: InterpretationResult,
    description: Optional[ObservationDescription] = None,
) -> str:
    """Format an interpretation for human-readable display.

    Args:
        result: Interpretation result
        description: Optional observation to list field by field

    Returns:
        Formatted string
    """
    lines = []
    lines.append("=" * 80)
    lines.append("Pet Signal Interpretation Report")
    lines.append("=" * 80)
    lines.append("")

    if description is not None:
        lines.append("[Observation]")
        for field in ObservationField:
            value = description.get(field)
            if value:
                lines.append(f"  {field.title + ':':<11} {value}")
        lines.append("")

    lines.append("[Interpretation]")
    lines.append(f"  Emotion:    {result.emotion}")
    lines.append(f"  Confidence: {result.confidence}%")
    lines.append(f"  Context:    {result.context}")
    lines.append(f"  Method:     {result.method}")
    if result.pattern:
        lines.append(f"  Pattern:    {result.pattern}")
    if result.context_impact != "neutral":
        lines.append(f"  Situation:  {result.context_impact}")
    lines.append("")

    lines.append("[Translation]")
    lines.append(f"  {result.translation}")
    lines.append("")

    if result.recommendation:
        lines.append("[Recommendation]")
        lines.append(f"  {result.recommendation}")
        lines.append("")

    lines.append("=" * 80)

    return "\n".join(lines)


# Convenience functions

def parse_description(generated_text: str, strict: bool = False) -> ObservationDescription:
    """Parse a captioning answer.

    Args:
        generated_text: Raw captioning answer
        strict: Whether to raise on failure

    Returns:
        ObservationDescription
    """
    return DescriptionParser.parse_model_output(generated_text, strict=strict)
