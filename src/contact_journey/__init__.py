"""Contact journey: Salesforce activity history rendered as a positioned timeline."""

__version__ = "0.1.0"
