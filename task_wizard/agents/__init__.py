"""
Agent modules for the construction task wizard.
"""

from .task_wizard_agent import TaskWizardAgent, WizardState

__all__ = ["TaskWizardAgent", "WizardState"]
