from angler_finance.formatting import Currency, CurrencySetting, format_amount, format_percent


def test_whole_amounts_drop_decimals():
    assert format_amount(10.00, CurrencySetting(Currency.USD)) == "10 $"


def test_fractional_amounts_keep_two_digits():
    assert format_amount(10.50, CurrencySetting(Currency.USD)) == "10.50 $"


def test_negative_amounts_have_leading_minus():
    assert format_amount(-5, CurrencySetting(Currency.USD)) == "-5 $"
    assert format_amount(-7.25, CurrencySetting(Currency.EUR)) == "-7.25 €"


def test_negative_zero_renders_as_zero():
    assert format_amount(-0.001) == "0 $"


def test_symbols():
    assert format_amount(3, CurrencySetting(Currency.GBP)) == "3 £"
    assert format_amount(3, CurrencySetting(Currency.RUB)) == "3 ₽"
    assert format_amount(3, CurrencySetting(Currency.CUSTOM, "kr")) == "3 kr"
    assert format_amount(3) == "3 $"


def test_no_thousands_separator():
    assert format_amount(1234567.891) == "1234567.89 $"


def test_currency_setting_from_stored_value():
    assert CurrencySetting.from_value("GBP").currency is Currency.GBP
    assert CurrencySetting.from_value("bogus").currency is Currency.USD
    assert CurrencySetting.from_value(None).symbol == "$"
    assert CurrencySetting.from_value("Custom", "CHF").symbol == "CHF"


def test_format_percent_truncates():
    assert format_percent(0.999) == "99%"
    assert format_percent(1.0) == "100%"
