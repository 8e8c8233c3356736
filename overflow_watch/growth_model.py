"""
Growth Model Module
Derives a constant daily ID growth rate from a 30-day-ahead prediction
"""

HORIZON_DAYS = 30


class GrowthModel:
    """Converts a single forward-looking max ID prediction into a daily rate"""

    horizon_days = HORIZON_DAYS

    def compute_growth_rate(self, current_value: int, predicted_value_in_30_days: int) -> float:
        """
        Compute identifiers consumed per day

        A prediction below the current value is a valid shrinking signal
        (e.g. an ID reset) and yields a negative rate.

        Args:
            current_value: Current max ID of the table
            predicted_value_in_30_days: Predicted max ID 30 days from now

        Returns:
            Growth rate in IDs per day
        """
        return (predicted_value_in_30_days - current_value) / self.horizon_days
