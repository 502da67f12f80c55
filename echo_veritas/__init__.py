# Echo Veritas - Fake Review Detection Workbench
# ===============================================
# Accepts reviews one at a time or in batches (pasted text, CSV, Excel),
# sends them to an authenticity classifier and keeps per-session statistics.
#
# ARCHITECTURE LAYERS:
# - Web:            FastAPI dashboard and JSON API
# - Application:    Session, batch queue, dispatcher, result store, stats
# - Domain:         Review entities and the error taxonomy
# - Infrastructure: Classifier clients, importers, CSV export, settings
