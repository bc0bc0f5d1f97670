"""Action Executor - runs a handler and audits the attempt."""

import time
from datetime import datetime
from typing import Any, Dict, Optional

from .base import ActionContext, ActionResult, describe_error
from .registry import ActionRegistry, action_registry
from ..db.database_models.action_log import ActionLogDO
from ..db.repositories.action_log import ActionLogRepository
from ..utils.clock import utc_now
from ..utils.logger import get_app_logger, with_context
from ..utils.masking import mask_sensitive


class ActionExecutor:
    """
    Executes registered actions.

    Every real invocation produces exactly one audit record, whether the
    handler succeeds, fails or raises. Audit-write failures are logged at
    CRITICAL level and never change the result returned to the caller.
    """

    def __init__(self, audit_log: ActionLogRepository, registry: ActionRegistry = action_registry):
        """
        Initialize the executor.

        Args:
            audit_log: Audit sink for execution attempts
            registry: Action registry to dispatch through
        """
        self.audit_log = audit_log
        self.registry = registry
        self.logger = get_app_logger()

    async def execute(
        self,
        action_name: str,
        context: ActionContext,
        params: Optional[Dict[str, Any]] = None
    ) -> ActionResult:
        """
        Run an action.

        Args:
            action_name: Registered action name
            context: Invocation context
            params: Handler parameters

        Returns:
            ActionResult; exceptions are never propagated
        """
        handler = self.registry.get(action_name)
        if handler is None:
            # Nothing touched external systems, so nothing to audit
            return ActionResult.fail(f"Acción desconocida: {action_name}")

        params = params or {}
        started_at = utc_now()
        start = time.monotonic()

        self.logger.info(with_context(
            f"Executing action {action_name}",
            user=context.requester_id,
            project=context.project_id,
            params=params
        ))

        try:
            result = await handler(context, params)
        except Exception as e:
            self.logger.exception(f"Action {action_name} raised")
            result = ActionResult.fail(f"Error ejecutando acción: {describe_error(e)}")

        duration_ms = int((time.monotonic() - start) * 1000)
        self._audit(action_name, context, params, result, started_at, duration_ms)

        self.logger.info(
            f"Action {action_name} finished: success={result.success} ({duration_ms}ms)"
        )
        return result

    def _audit(
        self,
        action_name: str,
        context: ActionContext,
        params: Dict[str, Any],
        result: ActionResult,
        started_at: datetime,
        duration_ms: int
    ) -> None:
        record = ActionLogDO(
            assistant_id=context.assistant_id,
            project_id=context.project_id,
            user_id=context.requester_id,
            action_type=action_name,
            action_params=mask_sensitive(params),
            success=result.success,
            result_data=result.data,
            error_message=None if result.success else result.message,
            started_at=started_at,
            completed_at=utc_now(),
            duration_ms=duration_ms
        )
        try:
            self.audit_log.add(record)
        except Exception:
            # Compliance gap: the attempt happened but left no trail
            self.logger.critical(
                f"AUDIT WRITE FAILED for action {action_name} by user {context.requester_id} "
                f"on project {context.project_id} (success={result.success})",
                exc_info=True
            )
