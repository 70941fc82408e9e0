"""Country financial reference data and derived tax and cost-of-living results."""
