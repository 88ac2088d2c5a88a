"""Entity-relative derived fields (growth rates, rolling averages)."""
