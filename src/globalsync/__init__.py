"""GlobalSync - team timezone dashboard."""
