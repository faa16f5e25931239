"""Field Friends: creature encounters, friendship and battles."""
