"""Services — persistence adapter and business-rule orchestration (imperative shell)."""
