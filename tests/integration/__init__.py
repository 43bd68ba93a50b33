"""Integration tests for the HTML to text toolkit.

These tests run complete flows through real components: HTML files on disk
converted by the CLI, and HTTP requests served by the FastAPI application
configured from YAML and the environment. Nothing is mocked except the
.env lookup.

Run only these tests with:
    pytest tests/integration -m integration
"""
