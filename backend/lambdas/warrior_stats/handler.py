"""Lambda function: Get warrior statistics."""

import json
import logging
from typing import Any, Callable, Optional

from shared.config import DatabaseConfig
from shared.exceptions import ConfigurationError, MethodNotAllowedError, QueryStageError
from shared.response import (
    error_response,
    internal_error,
    method_not_allowed,
    ok,
    options_response,
)
from shared.stats import StatsClient, gather_warrior_stats
from shared.supabase import SupabaseClient

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

ALLOWED_METHODS = ("GET",)


def get_http_method(event: Any) -> Optional[str]:
    """
    Read the method from a REST (v1) or HTTP API (v2) proxy event.

    Returns None when the event carries no usable method.
    """
    if not isinstance(event, dict):
        return None

    method = event.get("httpMethod")
    if not method:
        request_context = event.get("requestContext")
        http = request_context.get("http") if isinstance(request_context, dict) else None
        method = http.get("method") if isinstance(http, dict) else None

    if not isinstance(method, str) or not method:
        return None
    return method.upper()


def load_config() -> DatabaseConfig:
    """Load configuration, treating invalid settings as unconfigured."""
    try:
        return DatabaseConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Invalid database configuration: {e}")
        return DatabaseConfig()


def build_handler(
    config: DatabaseConfig,
    client_factory: Callable[[DatabaseConfig], StatsClient] = SupabaseClient.from_config,
) -> Callable[[dict[str, Any], Any], dict[str, Any]]:
    """
    Create the stats handler bound to a database configuration.

    Args:
        config: Database configuration
        client_factory: Builds the database client for a request

    Returns:
        Lambda handler function
    """

    def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
        """
        Return active, inactive and total warrior counts plus active
        warriors grouped by status.
        """
        try:
            method = get_http_method(event)

            if method == "OPTIONS":
                return options_response()

            if not config.is_configured:
                logger.error(json.dumps({
                    "action": "warrior_stats_not_configured",
                    "method": method,
                }))
                return internal_error("Database not configured")

            if method not in ALLOWED_METHODS:
                raise MethodNotAllowedError(method or "UNKNOWN")

            client = client_factory(config)
            stats = gather_warrior_stats(client, config.warriors_table)
            logger.debug(f"Warrior stats: {stats}")
            return ok(stats.to_dict())

        except MethodNotAllowedError as e:
            logger.warning(f"Rejected {e.method} request to warrior stats")
            return method_not_allowed(e.method, ALLOWED_METHODS)

        except QueryStageError as e:
            # Database detail is already logged by the stage; only the stage message goes out
            return error_response(e.message, 500)

        except Exception:
            logger.exception("Unexpected error getting warrior statistics")
            return internal_error()

    return handler


handler = build_handler(load_config())
