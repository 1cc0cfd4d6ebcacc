"""DocuGen - function signature change detection and changelog drafting."""
