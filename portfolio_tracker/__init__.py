"""Stock portfolio tracker with live valuation."""
