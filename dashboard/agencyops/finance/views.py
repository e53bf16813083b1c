"""JSON API for exchange rates, conversion and sales reporting."""

import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from django_fxmoney.aggregation import aggregate, totals_by_currency
from django_fxmoney.formatting import format_currency
from django_fxmoney.money import Money
from django_fxmoney.services import convert_amount, get_rates, refresh_rates, to_decimal

from agencyops.api import HANDLED_ERRORS, BadRequest, error_response, parse_json_body
from agencyops.context import RequestContext, parse_currency

from .reporting import build_sales_stats, currency_goal, goal_progress, rank_leaderboard

logger = logging.getLogger(__name__)


def _amount(value, field: str):
    try:
        return to_decimal(value)
    except ValueError:
        raise BadRequest(f"Invalid {field}: {value!r}")


def _money_json(money: Money) -> dict:
    return {**money.to_dict(), "display": format_currency(money.amount, money.currency)}


@require_GET
def api_exchange_rates(request):
    """API: The current rate snapshot."""
    try:
        snapshot = get_rates()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return JsonResponse(snapshot.to_dict())


@csrf_exempt
@require_POST
def api_refresh_rates(request):
    """API: Fetch fresh rates from the provider (staff only)."""
    user = request.user
    if not (user.is_authenticated and user.is_staff):
        return JsonResponse(
            {"error": "forbidden", "detail": "Only staff can refresh exchange rates"},
            status=403,
        )
    try:
        snapshot = refresh_rates()
    except HANDLED_ERRORS as e:
        return error_response(e)
    logger.info("Exchange rates refreshed by %s", user.pk)
    return JsonResponse(snapshot.to_dict())


@require_GET
def api_convert(request):
    """API: Convert ?amount= from ?from= to ?to=."""
    params = request.GET
    missing = [name for name in ("amount", "from", "to") if not params.get(name)]
    if missing:
        return error_response(BadRequest(f"Missing required parameters: {', '.join(missing)}"))

    try:
        amount = _amount(params["amount"], "amount")
        from_currency = parse_currency(params["from"])
        to_currency = parse_currency(params["to"])
        converted = convert_amount(amount, from_currency, to_currency)
    except HANDLED_ERRORS as e:
        return error_response(e)

    return JsonResponse({
        "original": str(amount),
        "from": from_currency,
        "to": to_currency,
        "converted": str(Money(converted, to_currency).quantized().amount),
        "exact": str(converted),
    })


@csrf_exempt
@require_POST
def api_aggregate(request):
    """
    API: Sum mixed-currency amounts in the display currency.

    Body: {"items": [{"amount": "10", "currency": "EUR"}, ...], "currency": "USD"}
    """
    try:
        body = parse_json_body(request)
        context = RequestContext.from_request(request)
        currency = parse_currency(body.get("currency") or context.display_currency)
        items = body.get("items")
        if not isinstance(items, list):
            raise BadRequest("items must be a list")
        pairs = [
            (_amount(item.get("amount", item.get("price")), "amount"), item.get("currency"))
            for item in items
            if isinstance(item, dict)
        ]
        if len(pairs) != len(items):
            raise BadRequest("every item must be an object")
        total = aggregate(pairs, currency)
        by_currency = totals_by_currency(pairs)
    except HANDLED_ERRORS as e:
        return error_response(e)

    return JsonResponse({
        "total": _money_json(total),
        "byCurrency": {code: str(money.amount) for code, money in by_currency.items()},
    })


def _stats_from_json(data, context):
    if not isinstance(data, dict):
        raise BadRequest("employee entries must be objects")
    revenue = data.get("revenue") or []
    if not isinstance(revenue, list) or not all(isinstance(item, dict) for item in revenue):
        raise BadRequest("revenue must be a list of objects")
    items = [
        (_amount(item.get("amount", item.get("price")), "amount"), item.get("currency"))
        for item in revenue
    ]
    try:
        counts = {
            name: int(data.get(key, 0))
            for name, key in (
                ("confirmed_clients", "confirmedClients"),
                ("leads", "leads"),
                ("won_leads", "wonLeads"),
            )
        }
    except (TypeError, ValueError):
        raise BadRequest("confirmedClients, leads and wonLeads must be integers")
    return build_sales_stats(data.get("employeeId"), items, context, **counts)


@csrf_exempt
@require_POST
def api_leaderboard(request):
    """
    API: Rank sales employees for a period.

    Body: {"employees": [{"employeeId": 1, "revenue": [{"amount", "currency"}],
           "confirmedClients": 3, "leads": 10, "wonLeads": 4,
           "previous": {...same shape...}}]}
    """
    try:
        body = parse_json_body(request)
        context = RequestContext.from_request(request)
        employees = body.get("employees")
        if not isinstance(employees, list):
            raise BadRequest("employees must be a list")

        current, previous = [], {}
        for data in employees:
            stats = _stats_from_json(data, context)
            current.append(stats)
            if isinstance(data.get("previous"), dict):
                before = _stats_from_json(
                    {**data["previous"], "employeeId": stats.employee_id}, context
                )
                previous[stats.employee_id] = before
        entries = rank_leaderboard(current, previous)
    except HANDLED_ERRORS as e:
        return error_response(e)

    return JsonResponse({
        "currency": context.display_currency,
        "leaderboard": [
            {
                "rank": entry.rank,
                "employeeId": entry.stats.employee_id,
                "revenue": _money_json(entry.stats.revenue),
                "revenueByCurrency": {
                    code: str(money.amount) for code, money in entry.stats.revenue_by_currency.items()
                },
                "confirmedClients": entry.stats.confirmed_clients,
                "leads": entry.stats.leads,
                "conversionRate": entry.stats.conversion_rate,
                "revenueGrowth": entry.revenue_growth,
                "clientsGrowth": entry.clients_growth,
            }
            for entry in entries
        ],
    })


@csrf_exempt
@require_POST
def api_goals_progress(request):
    """
    API: Progress of goals, money goals shown in the display currency.

    Body: {"goals": [{"id": "g1", "current": 40, "target": 100, "currency": "EUR"}]}
    """
    try:
        body = parse_json_body(request)
        context = RequestContext.from_request(request)
        goals = body.get("goals")
        if not isinstance(goals, list) or not all(isinstance(goal, dict) for goal in goals):
            raise BadRequest("goals must be a list of objects")

        results = []
        for goal in goals:
            current = _amount(goal.get("current") or 0, "current")
            target = _amount(goal.get("target"), "target")
            if goal.get("currency"):
                result = currency_goal(current, target, parse_currency(goal["currency"]), context)
            else:
                result = {"progress": goal_progress(current, target)}
            results.append({"id": goal.get("id"), **result})
    except HANDLED_ERRORS as e:
        return error_response(e)

    return JsonResponse({"currency": context.display_currency, "goals": results})
