from .output_format import OutputFormat, resolve_output_format, DEFAULT_OUTPUT_DTYPE

__all__ = ["OutputFormat", "resolve_output_format", "DEFAULT_OUTPUT_DTYPE"]
