"""
Governance Cockpit — Workload & Governance Scoring Engine.

Pure scoring functions over an organizational snapshot:
- cockpit.workload: assignment load, person workload, fairness, score cache
- cockpit.governance: portfolio health, project RAG, reporting, diagnostics
- cockpit.contracts: snapshot and settings models
"""

__version__ = "10.1.0"
