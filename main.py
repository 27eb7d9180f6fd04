from flask import Flask, request, jsonify
from flask_cors import CORS
from payout_engine import PayoutProcessor, CloseoutService, EarningsAggregator
from payout_engine.earnings import estimate_from_dict
from payout_engine.output import OutputBuilder
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = os.environ.get("DEFAULT_CURRENCY", "USD")

app = Flask(__name__)

# Enable CORS for all routes (dashboard and closeout screens call the API directly)
CORS(app)

# Initialize the payout services
processor = PayoutProcessor()
closeout_service = CloseoutService(processor, default_currency=DEFAULT_CURRENCY)
earnings_aggregator = EarningsAggregator(processor, default_currency=DEFAULT_CURRENCY)
output_builder = OutputBuilder()


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Promoter Payout Engine API",
        "version": "1.0",
        "endpoints": {
            "calculate_payout": "/calculate_payout [POST]",
            "estimate": "/estimate [POST]",
            "closeout_report": "/closeout/report [POST]",
            "closeout_finalize": "/closeout/finalize [POST]",
            "promoter_earnings": "/promoter/earnings [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


def _handle(name, handler):
    """Run a request handler, mapping engine errors to JSON responses."""
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        logger.info(f"Processing {name}")
        result = handler(input_data)
        logger.info(f"{name} processed successfully")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine
        logger.error(f"Validation error in {name}: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error in {name}: {str(e)}", exc_info=True)
        return jsonify({
            "error": str(e),
            "status": "failed"
        }), 500


@app.route("/calculate_payout", methods=["POST"])
def calculate_payout():
    """Calculate a promoter payout from contract terms and check-ins"""
    return _handle("payout calculation", processor.process_from_dict)


@app.route("/estimate", methods=["POST"])
def estimate():
    """Estimated earnings for a live event (manual adjustments ignored)"""
    return _handle("earnings estimate", lambda data: estimate_from_dict(data, processor))


@app.route("/closeout/report", methods=["POST"])
def closeout_report():
    """Closeout report for all promoters of an event"""
    return _handle(
        "closeout report",
        lambda data: output_builder.build_closeout_report(closeout_service.report_from_dict(data))
    )


@app.route("/closeout/finalize", methods=["POST"])
def closeout_finalize():
    """Finalize closeout and return the payout run"""
    return _handle(
        "closeout finalize",
        lambda data: output_builder.build_payout_run(closeout_service.finalize_from_dict(data))
    )


@app.route("/promoter/earnings", methods=["POST"])
def promoter_earnings():
    """Earnings across all events for one promoter"""
    return _handle(
        "promoter earnings",
        lambda data: output_builder.build_earnings(earnings_aggregator.summarize_from_dict(data))
    )


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
