from prettytable import PrettyTable


def mask_value(value, visible=6):
    """
    Hides all but the first few characters of a cookie value.
    """
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * min(len(value) - visible, 24)


def cookie_table(cookies, show_values=False):
    """
    Builds a PrettyTable of the extracted cookies sorted by name.
    """
    table = PrettyTable(["Name", "Value", "Length"])
    table.align = 'l'
    table.align["Length"] = 'r'
    for name in sorted(cookies):
        value = cookies[name]
        table.add_row([name, value if show_values else mask_value(value), len(value)])
    return table
