"""newsdigest — content aggregation with a bounded HTML-to-markdown engine."""
