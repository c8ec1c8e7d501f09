"""Unit tests for analytics.risk."""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from trade_analytics.analytics.risk import (
    ClusterPattern,
    analyze_clusters,
    analyze_consecutive_losses,
    detect_overtrading,
    get_risk_metrics,
    max_drawdown_pct,
    performance_consistency,
    risk_score,
)


def test_consecutive_losses(spaced_trades):
    r = analyze_consecutive_losses(spaced_trades([-1, -1, -1, 1, -1, -1]))
    assert r.current == 2
    assert r.maximum == 3


def test_consecutive_losses_last_trade_win(spaced_trades):
    r = analyze_consecutive_losses(spaced_trades([-1, -1, 1]))
    assert r.current == 0
    assert r.maximum == 2
    assert analyze_consecutive_losses([]).maximum == 0


def test_overtrading_requires_min_trades(spaced_trades):
    trades = spaced_trades([1.0] * 5, gap=timedelta(minutes=10), duration=timedelta(minutes=20))
    assert detect_overtrading(trades) is False
    assert detect_overtrading(trades, min_trades=5) is True


def test_overtrading_fast_short_trades(spaced_trades):
    trades = spaced_trades([1.0] * 12, gap=timedelta(minutes=10), duration=timedelta(minutes=20))
    assert detect_overtrading(trades) is True


def test_overtrading_spaced_out(spaced_trades):
    trades = spaced_trades([1.0] * 12, gap=timedelta(hours=2), duration=timedelta(minutes=20))
    assert detect_overtrading(trades) is False
    five = spaced_trades([1.0] * 5, gap=timedelta(hours=2), duration=timedelta(minutes=20))
    assert detect_overtrading(five, min_trades=5) is False


def test_overtrading_long_holds(spaced_trades):
    trades = spaced_trades([1.0] * 12, gap=timedelta(minutes=10), duration=timedelta(hours=2))
    assert detect_overtrading(trades) is False


def test_overtrading_uses_recent_lookback(spaced_trades, make_trade):
    old = spaced_trades([1.0] * 30, gap=timedelta(days=1), duration=timedelta(minutes=20))
    start = old[-1].timestamp + timedelta(days=1)
    recent = [
        make_trade(1.0, timestamp=start + i * timedelta(minutes=5), duration=timedelta(minutes=5))
        for i in range(30)
    ]
    assert detect_overtrading(old + recent) is True


def test_clusters_winning_streak(make_trade):
    t0 = datetime(2024, 1, 1, 9)
    trades = [
        make_trade(50.0, timestamp=t0),
        make_trade(30.0, timestamp=t0 + timedelta(minutes=30)),
        make_trade(-20.0, timestamp=t0 + timedelta(minutes=60)),
        make_trade(40.0, timestamp=t0 + timedelta(minutes=90)),
    ]
    clusters = analyze_clusters(trades)
    assert len(clusters) == 1
    c = clusters[0]
    assert c.pattern is ClusterPattern.WINNING_STREAK
    assert c.trade_count == 4
    assert c.average_pnl == pytest.approx(25.0)
    assert c.start_time == t0
    assert c.end_time == t0 + timedelta(minutes=90)


def test_clusters_split_and_average_per_cluster(make_trade):
    t0 = datetime(2024, 1, 1, 9)
    first = [make_trade(-100.0, timestamp=t0 + timedelta(minutes=10 * i)) for i in range(3)]
    t1 = t0 + timedelta(hours=5)
    second = [
        make_trade(p, timestamp=t1 + timedelta(minutes=10 * i))
        for i, p in enumerate([5.0, -6.0, 4.0, -5.0])
    ]
    lone = [make_trade(1000.0, timestamp=t1 + timedelta(hours=10))]
    clusters = analyze_clusters(first + second + lone)
    assert [c.pattern for c in clusters] == [ClusterPattern.LOSING_STREAK, ClusterPattern.CHOPPY]
    assert clusters[0].average_pnl == -100.0
    assert clusters[1].average_pnl == pytest.approx(-0.5)


def test_clusters_normal_and_small_groups(make_trade):
    t0 = datetime(2024, 1, 1, 9)
    trades = [
        make_trade(p, timestamp=t0 + timedelta(minutes=20 * i))
        for i, p in enumerate([100.0, -50.0, 100.0, -50.0])
    ]
    clusters = analyze_clusters(trades)
    assert clusters[0].pattern is ClusterPattern.NORMAL
    assert analyze_clusters(trades[:2]) == []
    assert analyze_clusters([]) == []


def test_cluster_window_boundary_inclusive(make_trade):
    t0 = datetime(2024, 1, 1)
    trades = [make_trade(1.0, timestamp=t0 + i * timedelta(hours=2)) for i in range(3)]
    assert len(analyze_clusters(trades)) == 1
    assert analyze_clusters(trades, window=timedelta(hours=1)) == []


def test_performance_consistency(make_trade):
    trades = [make_trade(1.0, pnl_pct=2.0), make_trade(-1.0, pnl_pct=-2.0)]
    assert performance_consistency(trades) == pytest.approx(2.0)
    assert performance_consistency([]) == 0.0


def test_max_drawdown_pct(spaced_trades):
    assert max_drawdown_pct(spaced_trades([100.0, -220.0]), 1000.0) == pytest.approx(20.0)


def test_risk_score_empty():
    assert risk_score([], 10000.0) == 0


def test_risk_score_components(spaced_trades):
    # drawdown 20% -> 30 (capped); 1 loss -> 5; std(pnl_pct)=2 -> 5; no overtrading
    trades = spaced_trades([100.0, -220.0], gap=timedelta(days=1))
    trades = [
        replace(t, pnl_pct=p) for t, p in zip(trades, [2.0, -2.0])
    ]
    assert risk_score(trades, 1000.0) == 40


def test_risk_score_accepts_upstream_values(spaced_trades):
    trades = spaced_trades([10.0, 10.0], gap=timedelta(days=1))
    score = risk_score(trades, 10000.0, max_drawdown_pct=10.0, max_consecutive_losses=2, overtrading=True)
    assert score == 15 + 10 + 0 + 20


def test_risk_score_clamps_pathological(spaced_trades):
    trades = spaced_trades([-100.0] * 1000, gap=timedelta(minutes=1), duration=timedelta(minutes=1), pnl_pct=-5.0)
    trades[0] = replace(trades[0], pnl_pct=500.0)
    score = risk_score(trades, 1000.0)
    assert score == 100
    assert 0 <= score <= 100


def test_get_risk_metrics(spaced_trades):
    trades = spaced_trades([10.0, -5.0, -5.0], gap=timedelta(days=1))
    r = get_risk_metrics(trades, 10000.0)
    assert r.consecutive_losses == 2
    assert r.max_consecutive_losses == 2
    assert r.overtrading_flag is False
    assert r.avg_daily_trades == pytest.approx(1.5)
    assert 0 <= r.risk_score <= 100


def test_get_risk_metrics_empty():
    r = get_risk_metrics([], 10000.0)
    assert r.risk_score == 0
    assert r.avg_daily_trades == 0.0


def test_overtrading_rejects_non_positive_lookback(spaced_trades):
    trades = spaced_trades([1.0] * 12, gap=timedelta(minutes=10))
    with pytest.raises(ValueError, match="lookback"):
        detect_overtrading(trades, lookback=0)
