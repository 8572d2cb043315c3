from offcut_tracker.leftovers.calculator import calculate_leftovers, parse_size, summarize_leftovers
