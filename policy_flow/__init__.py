"""policy-flow: lifecycle workflow engine for insurance policy requests."""

__version__ = "0.1.0"
