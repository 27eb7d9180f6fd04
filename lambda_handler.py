"""
AWS Lambda handler for the Promoter Payout Engine API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from payout_engine import CloseoutService, EarningsAggregator, PayoutProcessor
from payout_engine.earnings import estimate_from_dict
from payout_engine.output import OutputBuilder

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")
DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "USD")

# Initialize services (reused across warm invocations)
processor = PayoutProcessor()
closeout_service = CloseoutService(processor, default_currency=DEFAULT_CURRENCY)
earnings_aggregator = EarningsAggregator(processor, default_currency=DEFAULT_CURRENCY)
output_builder = OutputBuilder()

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

POST_ROUTES = {
    "/calculate_payout": processor.process_from_dict,
    "/estimate": lambda data: estimate_from_dict(data, processor),
    "/closeout/report": lambda data: output_builder.build_closeout_report(closeout_service.report_from_dict(data)),
    "/closeout/finalize": lambda data: output_builder.build_payout_run(closeout_service.finalize_from_dict(data)),
    "/promoter/earnings": lambda data: output_builder.build_earnings(earnings_aggregator.summarize_from_dict(data)),
}


def _response(status_code, body):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(body)}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health, GET /api
    - POST /calculate_payout, /estimate, /closeout/report,
      /closeout/finalize, /promoter/earnings
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path in POST_ROUTES and http_method == "POST":
        return handle_post(event, path)
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Promoter Payout Engine API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {path: f"{path} [POST]" for path in POST_ROUTES} | {"health": "/health [GET]"},
        },
    )


def handle_post(event, path):
    """Parse the request body and run the engine handler for the path."""
    try:
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        logger.info(f"Processing {path}")
        result = POST_ROUTES[path](input_data)
        logger.info(f"Processed {path} successfully")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine (missing fields, invalid types, etc.)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
