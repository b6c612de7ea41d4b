SAMPLE_PROFILE = {
    "name": "Alex Rivera",
    "currency": "$",
    "annual_income_goal": 80000,
    "tax_rate": 30,
    "work_weeks_per_year": 48,
    "days_per_week": 4,
    "hours_per_day": 8,
    "percent_billable": 35,
    "target_shoots_per_year": 50,
    "expenses": [
        {"id": "1", "name": "Software Subscriptions (Adobe, CRM)", "amount": 60},
        {"id": "2", "name": "Gear Insurance", "amount": 40},
        {"id": "3", "name": "Website Hosting", "amount": 30},
        {"id": "4", "name": "Marketing/Ads", "amount": 200},
    ],
}

SAMPLE_QUOTE_REQUEST = {
    "title": "Rivera Family Session",
    "inputs": {
        "type": "individual",
        "shoot_hours": 2,
        "edit_time_ratio": 0.5,
        "images": 5,
        "retouch_time": 15,
        "travel_hours": 1,
        "admin_hours": 2,
    },
    "project_expenses": [
        {"id": "1", "name": "Assistant / Grip", "amount": 0},
        {"id": "2", "name": "Studio Rental", "amount": 0},
        {"id": "3", "name": "Parking / Meals", "amount": 0},
    ],
}
