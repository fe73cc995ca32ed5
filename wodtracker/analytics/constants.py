# wodtracker/analytics/constants.py

# Scoring types ranked by elapsed time parsed from the formatted score
LOWER_IS_BETTER = frozenset({"For Time"})
# Scoring types ranked by score_value
HIGHER_IS_BETTER = frozenset({"AMRAP", "Max Reps"})

RECENT_WORKOUTS_LIMIT = 5
PERSONAL_RECORDS_LIMIT = 5

# Current month plus the five before it
MONTHLY_PROGRESS_MONTHS = 6

FEELING_RATINGS = (1, 2, 3, 4, 5)
