"""Unit tests for analytics.behavior."""

import math
from datetime import datetime, timedelta

import pytest
from trade_analytics.analytics.behavior import (
    StreakType,
    analyze_by_symbol,
    analyze_directional_bias,
    analyze_streaks,
    average_hold_time,
    average_loss,
    average_win,
    expectancy,
    largest_gain,
    largest_loss,
    long_short_breakdown,
    profit_factor,
    win_rate,
)
from trade_analytics.core.types import Side


def test_win_rate(spaced_trades):
    assert win_rate(spaced_trades([1, -1, 1, 1])) == 75.0
    assert win_rate([]) == 0.0


def test_average_win_loss(spaced_trades):
    trades = spaced_trades([10.0, -4.0, 20.0, -6.0])
    assert average_win(trades) == 15.0
    assert average_loss(trades) == 5.0
    assert average_win(spaced_trades([-1.0])) == 0.0
    assert average_loss(spaced_trades([1.0])) == 0.0


def test_expectancy(spaced_trades):
    trades = spaced_trades([10.0, -5.0, 5.0])
    assert expectancy(trades) == pytest.approx(2 / 3 * 7.5 - 1 / 3 * 5.0)
    assert expectancy([]) == 0.0


def test_profit_factor(spaced_trades):
    assert profit_factor(spaced_trades([10, -5, 10, -5])) == 2.0
    assert math.isinf(profit_factor(spaced_trades([10, 10])))
    assert profit_factor(spaced_trades([-5, -5])) == 0.0
    assert profit_factor([]) == 0.0


def test_largest_gain_and_loss(spaced_trades):
    trades = spaced_trades([10.0, -30.0, 50.0, -5.0])
    assert largest_gain(trades).pnl == 50.0
    assert largest_loss(trades).pnl == -30.0
    assert largest_gain(spaced_trades([-1.0])) is None
    assert largest_loss([]) is None


def test_analyze_by_symbol(make_trade):
    trades = [
        make_trade(10.0, symbol="BTC/USDC"),
        make_trade(-20.0, symbol="SOL/USDC"),
        make_trade(40.0, symbol="ETH/USDC"),
        make_trade(5.0, symbol="BTC/USDC"),
    ]
    result = analyze_by_symbol(trades)
    assert [s.symbol for s in result] == ["ETH/USDC", "BTC/USDC", "SOL/USDC"]
    btc = result[1]
    assert btc.trades == 2
    assert btc.win_rate == 100.0
    assert btc.total_pnl == 15.0
    assert btc.average_pnl == 7.5
    assert btc.volume == 200.0
    assert sum(s.total_pnl for s in result) == sum(t.pnl for t in trades)
    assert sum(s.trades for s in result) == len(trades)


def test_analyze_by_symbol_ties_keep_first_seen(make_trade):
    trades = [make_trade(5.0, symbol="B"), make_trade(5.0, symbol="A")]
    assert [s.symbol for s in analyze_by_symbol(trades)] == ["B", "A"]


def test_analyze_streaks(spaced_trades):
    s = analyze_streaks(spaced_trades([1, 1, 1, -1, -1, 1, -1, -1]))
    assert s.current_streak == 2
    assert s.current_streak_type is StreakType.LOSS
    assert s.longest_win_streak == 3
    assert s.longest_loss_streak == 2


def test_analyze_streaks_empty():
    s = analyze_streaks([])
    assert s.current_streak == 0
    assert s.current_streak_type is StreakType.NONE


def test_analyze_streaks_unsorted_input(make_trade):
    t0 = datetime(2024, 1, 1)
    trades = [
        make_trade(5.0, timestamp=t0 + timedelta(hours=2)),
        make_trade(-5.0, timestamp=t0),
        make_trade(5.0, timestamp=t0 + timedelta(hours=1)),
    ]
    s = analyze_streaks(trades)
    assert s.current_streak == 2
    assert s.current_streak_type is StreakType.WIN


def test_directional_bias_uses_reference_time(make_trade):
    now = datetime(2024, 6, 30)
    trades = [
        make_trade(1.0, side=Side.LONG, timestamp=now - timedelta(days=60)),
        make_trade(1.0, side=Side.SHORT, timestamp=now - timedelta(days=20)),
        make_trade(1.0, side=Side.LONG, timestamp=now - timedelta(days=3)),
        make_trade(1.0, side=Side.LONG, timestamp=now - timedelta(days=1)),
    ]
    bias = analyze_directional_bias(trades, now=now)
    assert bias.overall == 75.0
    assert bias.recent_month == pytest.approx(200 / 3)
    assert bias.recent_week == 100.0


def test_directional_bias_empty_windows_are_neutral(make_trade):
    now = datetime(2024, 6, 30)
    trades = [make_trade(1.0, side=Side.SHORT, timestamp=now - timedelta(days=90))]
    bias = analyze_directional_bias(trades, now=now)
    assert bias.overall == 0.0
    assert bias.recent_month == 50.0
    assert bias.recent_week == 50.0


def test_long_short_breakdown(make_trade):
    trades = [
        make_trade(1.0, side=Side.LONG),
        make_trade(-1.0, side=Side.LONG),
        make_trade(1.0, side=Side.SHORT),
    ]
    b = long_short_breakdown(trades)
    assert b.long_trades == 2 and b.short_trades == 1
    assert b.ratio == 2.0
    assert b.long_win_rate == 50.0
    assert b.short_win_rate == 100.0


def test_average_hold_time(make_trade):
    trades = [make_trade(1.0, duration=timedelta(minutes=10)), make_trade(1.0, duration=timedelta(minutes=30))]
    assert average_hold_time(trades) == timedelta(minutes=20)
    assert average_hold_time([]) == timedelta(0)
