"""Workflow capability: named sequences of registered step functions."""

from archartifacts.services.workflow.factory import create_workflow
from archartifacts.services.workflow.provider import WorkflowProvider
from archartifacts.services.workflow.routes import build_workflow_router, register_workflow_routes
from archartifacts.services.workflow.singleton import WorkflowService

__all__ = [
    "WorkflowProvider",
    "WorkflowService",
    "build_workflow_router",
    "create_workflow",
    "register_workflow_routes",
]
