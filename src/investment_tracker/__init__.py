"""Track stock purchases and their annualized compounded returns."""
