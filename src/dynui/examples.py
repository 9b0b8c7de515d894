"""Bundled sample datasets."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Example:
    id: str
    name: str
    description: str
    data: dict[str, Any]


EXAMPLES: dict[str, Example] = {
    example.id: example
    for example in (
        Example(
            id="github",
            name="GitHub Repository",
            description="Repository stats with commits, contributors, and languages",
            data={
                "name": "acme/widget-api",
                "stars": 1247,
                "forks": 89,
                "open_issues": 23,
                "recent_commits": [
                    {"message": "fix: resolve auth issue", "author": "alice", "time": "2h ago"},
                    {"message": "feat: add rate limiting", "author": "bob", "time": "5h ago"},
                    {"message": "docs: update README", "author": "carol", "time": "1d ago"},
                ],
                "contributors": [
                    {"name": "alice", "commits": 142},
                    {"name": "bob", "commits": 89},
                    {"name": "carol", "commits": 34},
                ],
                "languages": {"TypeScript": 65, "Python": 30, "Shell": 5},
            },
        ),
        Example(
            id="ecommerce",
            name="E-commerce Dashboard",
            description="Sales metrics with products and orders",
            data={
                "total_revenue": 125430,
                "orders_today": 47,
                "active_customers": 1893,
                "conversion_rate": 3.2,
                "products": [
                    {"name": "Widget Pro", "price": 49.99, "stock": 142, "sales": 89},
                    {"name": "Gadget X", "price": 89.99, "stock": 38, "sales": 56},
                    {"name": "Tool Plus", "price": 29.99, "stock": 234, "sales": 123},
                ],
                "recent_orders": [
                    {"id": "#1234", "customer": "John D.", "total": 149.99, "status": "shipped", "date": "2024-01-15"},
                    {"id": "#1235", "customer": "Sarah M.", "total": 89.99, "status": "processing", "date": "2024-01-15"},
                    {"id": "#1236", "customer": "Mike R.", "total": 249.98, "status": "delivered", "date": "2024-01-14"},
                ],
                "top_categories": {"Electronics": 45, "Accessories": 30, "Tools": 15, "Other": 10},
            },
        ),
        Example(
            id="analytics",
            name="Analytics Report",
            description="Website analytics with traffic sources and top pages",
            data={
                "pageviews": 45678,
                "unique_visitors": 12340,
                "bounce_rate": 34.5,
                "avg_session_duration": 245,
                "traffic_sources": {"organic": 45, "direct": 30, "social": 15, "referral": 10},
                "top_pages": [
                    {"path": "/home", "views": 15000, "avg_time": 180},
                    {"path": "/products", "views": 8900, "avg_time": 320},
                    {"path": "/blog", "views": 5600, "avg_time": 420},
                    {"path": "/about", "views": 3200, "avg_time": 95},
                ],
                "devices": {"desktop": 60, "mobile": 35, "tablet": 5},
            },
        ),
        Example(
            id="project",
            name="Project Management",
            description="Project tasks, team members, and milestones",
            data={
                "project_name": "Website Redesign",
                "completion": 67,
                "tasks_total": 45,
                "tasks_completed": 30,
                "tasks": [
                    {"title": "Design homepage mockup", "status": "completed", "assignee": "Alice", "priority": "high"},
                    {"title": "Implement navigation", "status": "in_progress", "assignee": "Bob", "priority": "high"},
                    {"title": "Write content", "status": "pending", "assignee": "Carol", "priority": "medium"},
                    {"title": "Setup CI/CD", "status": "in_progress", "assignee": "Dave", "priority": "low"},
                ],
                "team_members": [
                    {"name": "Alice", "role": "Designer", "tasks": 12},
                    {"name": "Bob", "role": "Developer", "tasks": 18},
                    {"name": "Carol", "role": "Content Writer", "tasks": 8},
                    {"name": "Dave", "role": "DevOps", "tasks": 7},
                ],
                "milestones": [
                    {"name": "Design Phase", "date": "2024-01-20", "completed": True},
                    {"name": "Development Phase", "date": "2024-02-15", "completed": False},
                    {"name": "Testing Phase", "date": "2024-03-01", "completed": False},
                ],
            },
        ),
        Example(
            id="iot",
            name="IoT Device Monitor",
            description="IoT sensors and device status monitoring",
            data={
                "devices_online": 24,
                "devices_offline": 2,
                "alerts_active": 3,
                "avg_temperature": 72.4,
                "avg_humidity": 45.2,
                "sensors": [
                    {"id": "TEMP-01", "name": "Living Room Temp", "value": 72.1, "unit": "°F", "status": "normal"},
                    {"id": "HUM-01", "name": "Living Room Humidity", "value": 45.2, "unit": "%", "status": "warning"},
                    {"id": "TEMP-02", "name": "Bedroom Temp", "value": 68.5, "unit": "°F", "status": "normal"},
                    {"id": "MOTION-01", "name": "Front Door Motion", "value": 0, "unit": "events", "status": "normal"},
                ],
                "device_status": {"online": 24, "offline": 2, "maintenance": 1},
                "recent_alerts": [
                    {"sensor": "HUM-01", "message": "Humidity above threshold", "time": "10m ago", "severity": "warning"},
                    {"sensor": "TEMP-03", "message": "Sensor offline", "time": "1h ago", "severity": "error"},
                    {"sensor": "MOTION-02", "message": "Motion detected", "time": "2h ago", "severity": "info"},
                ],
            },
        ),
    )
}


def get_example(example_id: str) -> Example | None:
    return EXAMPLES.get(example_id)


__all__ = ["Example", "EXAMPLES", "get_example"]
