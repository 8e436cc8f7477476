"""
Financial Analysis Pro.

Conversational four-pillar investment analysis: an agent session that talks to
a remote analysis agent, and the ranking view-model that filters, sorts,
paginates and exports the agent's ranked investments.
"""

__version__ = "0.1.0"
