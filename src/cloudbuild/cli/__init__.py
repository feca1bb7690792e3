"""Command-line front-end for Cloud Build iOS credentials."""
