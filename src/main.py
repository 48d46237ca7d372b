"""
AWS Lambda entry point for the Infrastructure Manifest Scanner.
"""

import json
from datetime import datetime, timezone

from .config import load_config
from .infra_scan import format_drift_issue, run_scan
from .infra_scan.output import DRIFT_ISSUE_LABEL, DRIFT_ISSUE_TITLE
from .utils import setup_logging


def lambda_handler(event: dict, context: object) -> dict:
    """
    AWS Lambda handler function.

    Args:
        event: Lambda event data. An optional "repository" names the
            repository reported in the drift issue.
        context: Lambda context

    Returns:
        Dictionary with statusCode and body containing the scan result
    """
    logger = setup_logging()
    try:
        # Load and validate configuration
        config = load_config()

        # Setup logging
        logger = setup_logging(config.log_level)
        logger.info(f"Starting infrastructure scan of {config.manifest_path}")

        result = run_scan(config)
        drift_detected = not result.is_clean

        logger.info(
            f"Infrastructure scan completed. Drift detected: {drift_detected}"
        )

        body = result.to_dict()
        body["drift_detected"] = drift_detected
        if drift_detected:
            repository = (event or {}).get("repository", config.manifest_path)
            scan_time = datetime.now(timezone.utc).isoformat()
            body["issue"] = {
                "title": DRIFT_ISSUE_TITLE,
                "label": DRIFT_ISSUE_LABEL,
                "body": format_drift_issue(result, repository, scan_time),
            }

        return {
            'statusCode': 200,
            'body': json.dumps(body),
            'headers': {
                'Content-Type': 'application/json'
            }
        }

    except ValueError as e:
        # Configuration or manifest errors
        logger.error(f"Configuration error: {str(e)}")
        return {
            'statusCode': 400,
            'body': json.dumps({
                'error': 'Configuration error',
                'message': str(e)
            }),
            'headers': {
                'Content-Type': 'application/json'
            }
        }

    except Exception as e:
        # Unexpected errors
        logger.error(f"Unexpected error: {str(e)}")
        return {
            'statusCode': 500,
            'body': json.dumps({
                'error': 'Internal server error',
                'message': str(e)
            }),
            'headers': {
                'Content-Type': 'application/json'
            }
        }
