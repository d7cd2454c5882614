"""BoxBreaker: expected value of sealed trading card product."""
