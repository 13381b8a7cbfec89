"""FastAPI server that parses pasted ledger text for the invoice screen."""

from typing import Any

from daicho.ledger.format_rules import LedgerFormatError
from daicho.ledger.formatter import format_ledger_text, result_to_payload
from daicho.ledger.ledger_parser import parse
from daicho.runtime import get_logger, load_ledger_format
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

logger = get_logger(__name__)

app = FastAPI(title="Delivery Ledger Parser")


async def _read_text(request: Request) -> str | None:
    """Accept either JSON {"text": "..."} or a raw text/plain body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body: Any = await request.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or not isinstance(body.get("text"), str):
            return None
        return body["text"]
    raw = await request.body()
    return raw.decode("utf-8-sig", errors="replace")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


@app.post("/parse")
async def parse_ledger(request: Request) -> Response:
    """Parse ledger text and return rows, summary and warnings as JSON."""
    text = await _read_text(request)
    if text is None:
        return _error('Expected a text/plain body or JSON {"text": ...}', 400)

    try:
        ledger_format = load_ledger_format()
    except LedgerFormatError as e:
        logger.error(f"Invalid ledger format configuration: {e}")
        return _error("Invalid ledger format configuration", 500)

    result = parse(text, ledger_format)
    logger.info(f"Parsed {len(result.rows)} rows, {len(result.warnings)} warnings")
    payload = result_to_payload(result)
    payload["status"] = "success"
    return JSONResponse(payload)


@app.post("/parse/text")
async def parse_ledger_to_text(request: Request) -> Response:
    """Parse ledger text and return the tab-separated export text."""
    text = await _read_text(request)
    if text is None:
        return _error('Expected a text/plain body or JSON {"text": ...}', 400)

    try:
        ledger_format = load_ledger_format()
    except LedgerFormatError as e:
        logger.error(f"Invalid ledger format configuration: {e}")
        return _error("Invalid ledger format configuration", 500)

    result = parse(text, ledger_format)
    return PlainTextResponse(format_ledger_text(result, ledger_format=ledger_format))


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8080)
