"""Conversion options data model."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ConversionOptions:
    """Flags controlling the HTML-to-text pipeline.

    Attributes:
        preserve_line_breaks: Turn block element tags into newlines
        remove_extra_spaces: Collapse spaces and blank lines, trim lines
        convert_entities: Decode named and numeric character entities
    """
    preserve_line_breaks: bool = True
    remove_extra_spaces: bool = True
    convert_entities: bool = True

    # Request field name -> attribute name
    WIRE_FIELDS = {
        'preserveLineBreaks': 'preserve_line_breaks',
        'removeExtraSpaces': 'remove_extra_spaces',
        'convertEntities': 'convert_entities',
    }

    @classmethod
    def from_dict(
        cls,
        options: Optional[Mapping[str, Any]],
        defaults: Optional['ConversionOptions'] = None,
    ) -> 'ConversionOptions':
        """Build options from their request form (camelCase keys).

        Missing keys fall back to ``defaults`` (all true when omitted).
        Unknown keys are ignored.

        Example:
            >>> ConversionOptions.from_dict({'convertEntities': False})
            ConversionOptions(preserve_line_breaks=True, remove_extra_spaces=True, convert_entities=False)
        """
        base = defaults or cls()
        values = {attr: getattr(base, attr) for attr in cls.WIRE_FIELDS.values()}
        for wire_name, attr in cls.WIRE_FIELDS.items():
            if options and wire_name in options:
                values[attr] = bool(options[wire_name])
        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        """Return the options in their request form."""
        return {
            wire_name: getattr(self, attr)
            for wire_name, attr in self.WIRE_FIELDS.items()
        }
