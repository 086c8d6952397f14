# ABOUTME: bookdesc - book description cache for an e-book reader.
# ABOUTME: Loads per-file book metadata from persisted options or format plugins.
