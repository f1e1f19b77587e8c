"""Predicate builders for ConditionWaiter.

Each builder returns a zero-argument callable evaluated against the live
page on every poll. Pair the ones that return a value with ``until=``.
"""


def js_predicate(page, expression, arg=None):
    """Evaluate a JS function in the page; its (serialisable) result is the observed value."""
    return lambda: page.evaluate(expression, arg)


def element_count(page, selector):
    return lambda: page.locator(selector).count()


def count_at_least(page, selector, n):
    """Returns (predicate, until) for "at least ``n`` elements match ``selector``"."""
    return element_count(page, selector), lambda count: count >= n


def text_of(page, selector):
    # evaluate_all never waits for a match, unlike text_content()
    def read():
        text = page.locator(selector).evaluate_all("els => els.length ? els[0].textContent : ''")
        return (text or "").strip()
    return read


def text_equals(page, selector, expected):
    return text_of(page, selector), lambda text: text == expected


def text_changed(page, selector, previous):
    return text_of(page, selector), lambda text: text != previous


def texts_of(page, selector):
    return lambda: [t.strip() for t in page.locator(selector).all_text_contents()]


def is_sorted_numbers(values):
    try:
        numbers = [float(v) for v in values]
    except ValueError:
        return False
    return bool(numbers) and all(a <= b for a, b in zip(numbers, numbers[1:]))
