"""Generate catalog records for openFPGA cores published as GitHub releases."""
