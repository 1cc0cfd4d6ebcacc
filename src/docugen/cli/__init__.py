"""DocuGen command-line interface."""
