"""Quote fallback chain, holding metrics and RSU vesting analytics for one stock."""
