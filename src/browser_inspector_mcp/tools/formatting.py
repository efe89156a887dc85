"""Text rendering of inspection reports.

Each formatter is a pure function of its report: it reads fields and
returns the single text block sent back to the caller.
"""

from __future__ import annotations

from browser_inspector_mcp.models.reports import (
    ErrorReport,
    FormInteractionReport,
    PageContentReport,
    StructureReport,
    TrafficReport,
)
from browser_inspector_mcp.utils import truncate

PREVIEW_LIMIT = 1000
POST_DATA_LIMIT = 200
MAX_BUTTONS = 10
STANDARD_METHODS = ("GET", "POST", "PUT", "DELETE")


def _bullets(lines: list[str], indent: str = "  ") -> str:
    return "\n".join(f"{indent}• {line}" for line in lines)


def _warnings(warnings: list[str]) -> list[str]:
    if not warnings:
        return []
    return ["", f"⚠️ Warnings ({len(warnings)}):", _bullets(warnings)]


def format_page_content(report: PageContentReport) -> str:
    lines = [
        f"✅ Visited page: {report.requested_url}",
        "",
        "📊 Page info:",
        f"- Title: {report.title}",
        f"- Current URL: {report.url}",
    ]
    if report.status_code is not None:
        lines.append(f"- Status: {report.status_code}")
    lines += [
        f"- HTML length: {report.html_length} characters",
        f"- Visited at: {report.timestamp.isoformat()}",
        "",
        "📝 Content preview:",
        truncate(report.text_content, PREVIEW_LIMIT, "..."),
    ]
    if report.screenshot is not None:
        lines += ["", f"📸 Screenshot captured ({len(report.screenshot)} base64 characters)"]
        if report.screenshot_path:
            lines.append(f"   Saved to: {report.screenshot_path}")
    lines += _warnings(report.warnings)
    return "\n".join(lines)


def format_structure(report: StructureReport) -> str:
    lines = [f"🔍 Page structure report: {report.url}", "", f"📋 Forms ({len(report.forms)}):"]
    for i, form in enumerate(report.forms, 1):
        lines += [
            f"  Form {i}:",
            f"  - Action: {form.action or 'not set'}",
            f"  - Method: {form.method or 'GET'}",
            f"  - Inputs: {len(form.inputs)}",
        ]
        for field in form.inputs:
            required = " (required)" if field.required else ""
            lines.append(f"    • {field.name or field.id or '(unnamed)'}: {field.type}{required}")

    lines += ["", f"🔘 Buttons ({len(report.buttons)}):"]
    lines += [
        f'  • "{button.text}" ({button.type}) - '
        f"{'has click handler' if button.has_click_handler else 'no click handler'}"
        for button in report.buttons[:MAX_BUTTONS]
    ]
    if len(report.buttons) > MAX_BUTTONS:
        lines.append(f"  ... and {len(report.buttons) - MAX_BUTTONS} more")

    lines += ["", f"🔗 API endpoints ({len(report.api_links)}):"]
    lines += [f"  • {link.href}" for link in report.api_links]
    lines.append(f"🔗 Other links: {len(report.links)}")

    lines += ["", f"❌ Error messages ({len(report.errors)}):"]
    lines += [f"  • {error.text} ({error.selector})" for error in report.errors]

    structure = report.structure
    lines += [
        "",
        "🏗️ Structure:",
        f"- Total elements: {structure.total_elements}",
        f"- Scripts: {structure.scripts}",
        f"- Stylesheets: {structure.stylesheets}",
        f"- Images: {structure.images}",
        f"- Framework: {structure.primary_framework}",
    ]
    if len(structure.frameworks) > 1:
        lines.append(f"- Also detected: {', '.join(structure.frameworks[1:])}")

    if report.focus_area:
        lines += ["", f"🎯 Focus area: {report.focus_area}"]
    lines += _warnings(report.warnings)
    return "\n".join(lines)


def format_traffic(report: TrafficReport) -> str:
    lines = [
        f"🌐 Network traffic report: {report.url}",
        "",
        f"📊 Total requests: {report.total}",
        f"🔗 API requests: {len(report.api_requests)}",
        f"🖱️ Clicks performed: {report.clicks_performed}",
        "",
        "🔍 API endpoint details:",
    ]
    for request in report.api_requests:
        status = "pending" if request.pending else f"{request.status} {request.status_text or ''}".rstrip()
        lines += [
            f"  {request.method} {request.url}",
            f"  Status: {status}",
            f"  Time: {request.timestamp:%H:%M:%S}",
        ]
        if request.post_data:
            lines.append(f"  Data: {truncate(request.post_data, POST_DATA_LIMIT, '...')}")
        lines.append("")

    lines.append("📈 Requests by method:")
    for method in STANDARD_METHODS:
        lines.append(f"- {method}: {report.method_counts.get(method, 0)}")
    for method, count in sorted(report.method_counts.items()):
        if method not in STANDARD_METHODS:
            lines.append(f"- {method}: {count}")

    failed = report.failed_requests
    lines += ["", f"❌ Failed requests ({len(failed)}):"]
    lines += [f"  • {r.method} {r.url} - {r.status}" for r in failed]
    lines += _warnings(report.warnings)
    return "\n".join(lines)


def format_form_interaction(report: FormInteractionReport) -> str:
    lines = [f"🧪 Form interaction report: {report.url}", ""]
    if not report.form_found:
        lines += [f"❌ {error}" for error in report.errors]
        lines += _warnings(report.warnings)
        return "\n".join(lines)

    lines += [f"✅ Form test finished ({report.form_selector})", "", "📝 Interactions:"]
    for interaction in report.interactions:
        if interaction.success:
            lines.append(f"✅ Set {interaction.key} = {interaction.value}")
    if not any(i.success for i in report.interactions):
        lines.append("(none)")

    if report.errors:
        lines += ["", "❌ Errors:"]
        lines += [f"❌ {error}" for error in report.errors]
    lines += _warnings(report.warnings)
    return "\n".join(lines)


def format_errors(report: ErrorReport) -> str:
    lines = [
        f"🚨 Error report: {report.url}",
        "",
        f"📱 Page error elements ({len(report.page_errors)}):",
    ]
    lines += [f"  • {error.text} ({error.selector})" for error in report.page_errors]

    lines += ["", f"🖥️ Console errors ({len(report.console_errors)}):"]
    for error in report.console_errors:
        location = ""
        if error.url:
            location = f" - {error.url}"
            if error.line_number is not None:
                location += f":{error.line_number}"
        lines.append(f"  • {error.text}{location}")

    lines += ["", f"🌐 Network errors ({len(report.network_errors)}):"]
    lines += [f"  • {e.method} {e.url} - {e.failure}" for e in report.network_errors]

    if report.is_clean:
        lines += ["", "✅ No obvious errors detected"]
    lines += _warnings(report.warnings)
    return "\n".join(lines)
