"""Blog feed: posts, comments and likes over a key/value blob store."""
