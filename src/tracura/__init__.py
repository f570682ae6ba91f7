"""
Tracura Budget Core

Hierarchical budget aggregation and validation for the project-creation
workflow: Projects -> Phases -> Departments -> Line Items.
"""

__version__ = "1.0.0"
