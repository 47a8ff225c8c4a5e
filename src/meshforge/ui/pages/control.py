"""Machine control page: port, machine state, coordinates and job file."""

from __future__ import annotations

from nicegui import ui

from meshforge.models.job import FileInfoView
from meshforge.session.coordinates import CoordinateModel
from meshforge.session.job import JobFileModel
from meshforge.session.model import MachineSession
from meshforge.session.poller import StatusPoller
from meshforge.session.ports import PortRegistry
from meshforge.ui.theme import CATEGORY_COLORS, COLORS, GLOBAL_CSS, badge_style

_AXES = ("x", "y", "z")


def control_page() -> None:
    """Render the control page bound to the process-wide session."""
    from meshforge.api.app import get_session

    session = get_session()
    ui.add_css(GLOBAL_CSS)
    ui.dark_mode(True)
    ui.colors(primary=COLORS.accent)

    unsubscribers = []
    with ui.header(elevated=True).classes("q-pa-sm items-center"):
        unsubscribers.append(_port_select(session))
        ui.space()
        unsubscribers.append(_state_badge(session.poller))
        ui.space()

    with ui.row().classes("w-full q-pa-md gap-4 items-start"):
        unsubscribers.append(_coordinates_panel(session.coordinates))
        unsubscribers.append(_job_panel(session.job))

    def _teardown() -> None:
        for unsubscribe in unsubscribers:
            unsubscribe()

    ui.context.client.on_disconnect(_teardown)


def _port_select(session: MachineSession):
    registry: PortRegistry = session.ports

    select = ui.select({}, label="Serial port").classes("w-56")
    controller = ui.label("grblHAL").classes("text-caption").style(
        f"color: {COLORS.muted}; letter-spacing: 0.05em;"
    )
    error_label = ui.label("Connection error").classes("text-caption").style(
        f"color: {COLORS.red}"
    )
    with error_label:
        error_tip = ui.tooltip("")

    def on_change(event) -> None:
        if event.value and (registry.selected is None or registry.selected.name != event.value):
            registry.select_by_name(event.value)

    select.on_value_change(on_change)

    async def refresh() -> None:
        await session.refresh_ports()
        if registry.error:
            ui.notify(f"Port scan failed: {registry.error}", type="negative")

    ui.button(icon="refresh", on_click=refresh).props("flat round")

    def render(reg: PortRegistry) -> None:
        select.options = {p.name: p.title or p.name for p in reg.ports}
        select.value = reg.selected.name if reg.selected and reg.selected.name in select.options else None
        select.update()
        select.set_enabled(not reg.loading)
        controller.visible = reg.selected_display is not None
        error_label.visible = reg.error is not None
        error_tip.text = reg.error or ""

    render(registry)
    return registry.subscribe(render)


def _state_badge(poller: StatusPoller):
    badge = ui.label().classes("px-4 py-1 rounded text-bold").style("min-width: 6rem; text-align: center")

    def render(p: StatusPoller) -> None:
        badge.text = p.state_label.upper()
        badge.style(badge_style(CATEGORY_COLORS[p.category]))

    render(poller)
    return poller.subscribe(render)


def _coordinates_panel(model: CoordinateModel):
    work_labels: dict[str, ui.label] = {}
    machine_labels: dict[str, ui.label] = {}

    with ui.card().classes("p-4").style("min-width: 320px"):
        with ui.grid(columns=5).classes("items-center gap-2"):
            for header in ("", "", "Work", "Machine", ""):
                ui.label(header).classes("text-caption").style(f"color: {COLORS.muted}")
            for axis in _AXES:
                ui.label(axis.upper()).classes("text-bold")
                ui.button("Zero", on_click=lambda a=axis: model.zero_axis(a)).props("outline dense")
                work_labels[axis] = ui.label().classes("mono").style(f"color: {COLORS.accent}")
                machine_labels[axis] = ui.label().classes("mono").style(f"color: {COLORS.muted}")
                ui.button("Go", on_click=lambda a=axis: model.go_to(a)).props("dense")
        with ui.row().classes("w-full mt-4 gap-2"):
            ui.button("Zero all", icon="adjust", on_click=model.zero_all).classes("grow").props("outline")
            ui.button("Go XY", on_click=lambda: model.go_to("xy"))

    def render(m: CoordinateModel) -> None:
        for axis in _AXES:
            work_labels[axis].text = f"{getattr(m.work_pos, axis):.3f}"
            machine_labels[axis].text = f"{getattr(m.machine_pos, axis):.3f}"

    render(model)
    return model.subscribe(render)


def _job_panel(model: JobFileModel):
    with ui.card().classes("p-4 grow"):
        with ui.row().classes("w-full items-center gap-2"):
            path_input = ui.input("G-code file path").classes("grow")

            async def load() -> None:
                if not path_input.value:
                    ui.notify("Enter a file path first", type="warning")
                    return
                await model.open(path_input.value)
                if model.error:
                    ui.notify(model.error, type="negative")

            ui.button("Load File", icon="folder_open", on_click=load)

        with ui.row().classes("w-full items-center gap-2"):
            previous = ui.select({}, label="Previous files").classes("grow")

            async def on_previous(event) -> None:
                if event.value and event.value != model.selected_path:
                    await model.select_previous(event.value)

            previous.on_value_change(on_previous)
            ui.button(icon="refresh", on_click=model.reload).props("flat round")
            ui.button(icon="close", on_click=model.clear).props("flat round")

        name_label = ui.label().classes("text-subtitle1 text-bold")
        meta_label = ui.label().classes("text-caption").style(f"color: {COLORS.muted}")
        path_label = ui.label().classes("text-caption").style(f"color: {COLORS.muted}")

        with ui.row().classes("w-full items-start gap-4"):
            toggle = ui.toggle(
                {FileInfoView.SIZE.value: "Size", FileInfoView.INFO.value: "Info"},
                value=model.view_mode.value,
                on_change=lambda e: model.set_view(e.value),
            )
            bounds_table = ui.table(
                columns=[
                    {"name": "axis", "label": "", "field": "axis"},
                    {"name": "size", "label": "Size", "field": "size"},
                    {"name": "min", "label": "Min", "field": "min"},
                    {"name": "max", "label": "Max", "field": "max"},
                ],
                rows=[],
            ).classes("grow mono")
            placeholder = ui.label("Load a file to see its bounds.").style(f"color: {COLORS.muted}")

    def render(m: JobFileModel) -> None:
        previous.options = {f.path: f.name for f in m.refresh_history()}
        previous.value = m.selected_path or None
        previous.update()
        name_label.text = m.name or "No file loaded"
        meta_label.text = m.size_description
        path_label.text = m.path
        toggle.value = m.view_mode.value
        bounds = m.bounds
        if bounds is None:
            bounds_table.rows = []
        else:
            bounds_table.rows = [
                {
                    "axis": axis.upper(),
                    "size": f"{b.size:.2f}",
                    "min": f"{b.min:.2f}",
                    "max": f"{b.max:.2f}",
                }
                for axis, b in (("x", bounds.x), ("y", bounds.y), ("z", bounds.z))
            ]
        bounds_table.update()
        bounds_table.visible = bounds is not None and m.view_mode == FileInfoView.SIZE
        placeholder.visible = bounds is None
        meta_label.visible = m.view_mode == FileInfoView.INFO
        path_label.visible = m.view_mode == FileInfoView.INFO

    render(model)
    return model.subscribe(render)
