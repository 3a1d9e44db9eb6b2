from .state_machine import (
    WorkflowState,
    Scheduler,
    AsyncioScheduler,
    WorkflowRun,
    AnalysisWorkflow,
)

__all__ = [
    "WorkflowState",
    "Scheduler",
    "AsyncioScheduler",
    "WorkflowRun",
    "AnalysisWorkflow",
]
