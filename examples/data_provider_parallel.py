#!/usr/bin/env python3
"""
Data-Driven Parallel Example

Runs one case per data row, each in its own browser session, four at a time.
Every case opens a fresh session and releases it when the case ends, even if the
check fails.

Usage:
    python examples/data_provider_parallel.py

Requirements:
    - Chrome and Edge installed locally (drivers are resolved by Selenium Manager)
    - or GRID_HUB_URL pointing at a Selenium Grid
"""

import sys

from selenium.webdriver.common.by import By

from parallel_webdriver.config import get_settings
from parallel_webdriver.logging_config import setup_logging
from parallel_webdriver.main import build_registry
from parallel_webdriver.runner import run_parallel

START_URL = "https://www.automationpractice.pl/index.php"

# browser, email, password, expected error
LOGIN_DATA = [
    ("chrome", "email@domain", "password", "Invalid email address."),
    ("chrome", "empty@test.com", "wrongpass", "Authentication failed."),
    ("edge", "email@domain.", "password", "Invalid email address."),
    ("edge", "user4@test.com", "wrongpass", "Authentication failed."),
]


def invalid_login(driver, email, password, expected_error):
    driver.get(START_URL)
    driver.find_element(By.CLASS_NAME, "login").click()
    driver.find_element(By.ID, "email").send_keys(email)
    driver.find_element(By.ID, "passwd").send_keys(password)
    driver.find_element(By.ID, "SubmitLogin").click()

    alert = driver.find_element(By.CSS_SELECTOR, ".alert-danger")
    if expected_error not in alert.text:
        raise AssertionError(f"Expected '{expected_error}', got '{alert.text}'")


def main():
    settings = get_settings()
    setup_logging(settings.logging)

    with build_registry(settings) as registry:
        results = run_parallel(registry, LOGIN_DATA, invalid_login, max_workers=4)

    for result in results:
        status = "PASS" if result.passed else f"FAIL ({result.phase}: {result.error})"
        print(f"{result.index} {result.browser:<6} {result.duration:6.2f}s {status}")

    return 0 if all(result.passed for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
