"""Conversion request handling, independent of the transport.

Implements the ``/api/html-to-text`` request contract:

    request:  {"html": str, "options": {"preserveLineBreaks": bool,
               "removeExtraSpaces": bool, "convertEntities": bool}}
    success:  {"success": true, "text": str, "stats": {"originalLength": int,
               "convertedLength": int, "charactersRemoved": int,
               "wordCount": int}}
    failure:  {"success": false, "error": str}
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from src.config.models import ServiceConfig
from src.html_converter.html_to_text import HtmlToTextConverter
from src.models.conversion_options import ConversionOptions
from src.models.conversion_result import ConversionResult
from .errors import InternalError, RequestError, ValidationError

logger = logging.getLogger(__name__)

HTML_REQUIRED_MESSAGE = "HTML content required"


def validate_request(
    payload: Any,
    config: ServiceConfig,
) -> Tuple[str, ConversionOptions]:
    """Validate a conversion request and extract its input.

    Args:
        payload: Decoded request body
        config: Service configuration (size limit, default options)

    Returns:
        Tuple of (html, options)

    Raises:
        ValidationError: If html is missing, empty, not a string or too
            large, or if options is malformed
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")

    html = payload.get('html')
    if html is None or html == '':
        raise ValidationError(HTML_REQUIRED_MESSAGE, 'html')
    if not isinstance(html, str):
        raise ValidationError("HTML content must be a string", 'html')
    if len(html) > config.max_html_length:
        raise ValidationError(
            f"HTML content too large (max {config.max_html_length} characters)",
            'html'
        )

    options_raw = payload.get('options')
    if options_raw is None:
        return html, config.default_options
    if not isinstance(options_raw, Mapping):
        raise ValidationError("Options must be an object", 'options')

    for wire_name in ConversionOptions.WIRE_FIELDS:
        if wire_name in options_raw and not isinstance(options_raw[wire_name], bool):
            raise ValidationError(
                f"Option '{wire_name}' must be true or false",
                f'options.{wire_name}'
            )

    return html, ConversionOptions.from_dict(options_raw, config.default_options)


def build_success_response(result: ConversionResult) -> Dict[str, Any]:
    """Build the success body for a conversion result."""
    return {
        'success': True,
        'text': result.text,
        'stats': result.stats,
    }


def build_error_response(error: RequestError) -> Dict[str, Any]:
    """Build the failure body for a request error."""
    return {
        'success': False,
        'error': str(error),
    }


class ConversionRequestHandler:
    """Handles conversion requests for any transport.

    Validation failures are reported with their message and status 400.
    Any other exception is logged with its traceback and reported with a
    generic message and status 500; no partial output is returned.

    Example:
        >>> handler = ConversionRequestHandler()
        >>> handler.handle({"html": "<p>Hi</p>"})
        (200, {'success': True, 'text': 'Hi', 'stats': {...}})
    """

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        converter: Optional[HtmlToTextConverter] = None,
    ):
        self.config = config or ServiceConfig()
        self.converter = converter or HtmlToTextConverter(self.config.default_options)

    def handle(self, payload: Any) -> Tuple[int, Dict[str, Any]]:
        """Handle one conversion request.

        Args:
            payload: Decoded request body

        Returns:
            Tuple of (status_code, response body)
        """
        try:
            html, options = validate_request(payload, self.config)
        except ValidationError as e:
            logger.warning(f"Rejected conversion request: {e}")
            return e.status_code, build_error_response(e)

        try:
            result = self.converter.convert(html, options)
        except Exception:
            logger.exception("HTML to text conversion failed")
            error = InternalError()
            return error.status_code, build_error_response(error)

        logger.info(
            f"Converted request: {result.original_length} -> "
            f"{result.converted_length} characters, {result.word_count} words"
        )
        return 200, build_success_response(result)


def handle_conversion_request(
    payload: Any,
    config: Optional[ServiceConfig] = None,
) -> Tuple[int, Dict[str, Any]]:
    """Handle one conversion request with a default handler."""
    return ConversionRequestHandler(config).handle(payload)
