def format_currency(amount):
    sign = "-" if amount < 0 else ""
    return f"{sign}₹{abs(amount):,.0f}"


def format_percentage(value):
    return f"{value:.2f}%"


def format_number(value):
    return f"{round(value, 2):,}"


def format_duration(years, months):
    return f"{years} years ({months} months)"
