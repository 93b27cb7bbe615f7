"""Request handling: validation, pipeline wiring and the HTTP-style response envelope."""

import asyncio
import base64
import binascii
import json
import logging
import uuid
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .config import Settings, StorageBackend, settings
from .errors import InvalidRequest
from .models.conversation import PodcastRequest
from .services.pipeline import PodcastPipeline
from .services.publisher import Publisher
from .services.tts import AudioConfig, TurnSynthesizer, create_speech_provider
from .storage import create_object_store

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "OPTIONS,POST",
}

MISSING_FIELDS_MESSAGE = "Missing required fields: persons and turns"

RequestBody = Union[str, bytes, Dict[str, Any], None]

def build_response(status_code: int, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Build an API Gateway style response with CORS headers."""
    headers = dict(CORS_HEADERS)
    headers["Content-Type"] = "application/json"
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": json.dumps(payload) if payload is not None else "",
    }

def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )

class PodcastRequestHandler:
    """Validates render requests and runs them through the pipeline and publisher."""

    def __init__(self, pipeline: PodcastPipeline, publisher: Publisher):
        self.pipeline = pipeline
        self.publisher = publisher

    def parse_request(self, body: RequestBody) -> PodcastRequest:
        """Decode and validate a request body, raising InvalidRequest."""
        if isinstance(body, (bytes, bytearray)):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError:
                raise InvalidRequest("Request body is not valid UTF-8") from None

        if isinstance(body, str):
            try:
                body = json.loads(body)
            except json.JSONDecodeError:
                raise InvalidRequest("Request body is not valid JSON") from None

        if not isinstance(body, dict):
            raise InvalidRequest("Request body must be a JSON object")

        if body.get("persons") is None or not body.get("turns"):
            raise InvalidRequest(MISSING_FIELDS_MESSAGE)

        try:
            return PodcastRequest.model_validate(body)
        except ValidationError as e:
            raise InvalidRequest(f"Invalid request: {_describe_validation_error(e)}") from e

    async def handle(self, body: RequestBody, request_id: str) -> Dict[str, Any]:
        try:
            request = self.parse_request(body)
        except InvalidRequest as e:
            logger.warning(f"Rejected request {request_id}: {e.message}")
            return build_response(400, {"error": e.message})

        logger.info(
            f"Request {request_id}: {len(request.persons)} personas, {len(request.turns)} turns"
        )

        try:
            audio = await self.pipeline.render(request.persons, request.turns)
            url = await self.publisher.publish(audio, request_id)
        except Exception as e:
            logger.exception(f"Request {request_id} failed")
            return build_response(500, {
                "error": "Failed to generate podcast",
                "message": str(e),
            })

        return build_response(200, {
            "audioUrl": url,
            "message": "Podcast generated successfully",
        })

def create_handler(
    app_settings: Optional[Settings] = None,
    storage_backend: Optional[StorageBackend] = None
) -> PodcastRequestHandler:
    """Build a handler with real provider and store clients from settings."""
    app_settings = app_settings or settings
    audio_config = AudioConfig(
        format=app_settings.output_format,
        sample_rate=app_settings.sample_rate,
        language_code=app_settings.language_code
    )
    provider = create_speech_provider(
        app_settings.speech_provider,
        audio_config=audio_config,
        region_name=app_settings.aws_region
    )
    pipeline = PodcastPipeline(
        TurnSynthesizer.from_provider(provider, prosody_rate=app_settings.prosody_rate),
        max_concurrency=app_settings.max_concurrency
    )
    publisher = Publisher(
        create_object_store(app_settings, storage_backend),
        audio_config=audio_config,
        key_prefix=app_settings.podcast_key_prefix
    )
    return PodcastRequestHandler(pipeline, publisher)

# Built on the first invocation and reused while the Lambda container stays warm
_lambda_handler: Optional[PodcastRequestHandler] = None

def _get_lambda_handler() -> PodcastRequestHandler:
    global _lambda_handler
    if _lambda_handler is None:
        settings.setup_logging()
        _lambda_handler = create_handler()
    return _lambda_handler

def _event_method(event: Dict[str, Any]) -> Optional[str]:
    request_context = event.get("requestContext") or {}
    return event.get("httpMethod") or (request_context.get("http") or {}).get("method")

def _event_request_id(event: Dict[str, Any], context: Any) -> str:
    request_id = (event.get("requestContext") or {}).get("requestId")
    return request_id or getattr(context, "aws_request_id", None) or str(uuid.uuid4())

def _event_body(event: Dict[str, Any]) -> RequestBody:
    if "body" not in event:
        # Direct invocation with the request itself as the event
        return event if "turns" in event or "persons" in event else None
    body = event["body"]
    if body is not None and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidRequest("Request body is not valid base64") from None
    return body

def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda entry point for API Gateway and direct invocations."""
    if _event_method(event) == "OPTIONS":
        return build_response(204, None)

    request_id = _event_request_id(event, context)
    try:
        body = _event_body(event)
    except InvalidRequest as e:
        return build_response(400, {"error": e.message})

    try:
        handler = _get_lambda_handler()
    except Exception as e:
        logger.exception(f"Request {request_id} failed: could not build the podcast handler")
        return build_response(500, {
            "error": "Failed to generate podcast",
            "message": str(e),
        })

    return asyncio.run(handler.handle(body, request_id))
