"""Streamlit dashboard for the Texas top congested roadways."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd
import streamlit as st

CURRENT_FILE = Path(__file__).resolve()
for candidate in CURRENT_FILE.parents:
    if (candidate / "pyproject.toml").exists():
        project_root = candidate
        break
else:
    project_root = CURRENT_FILE.parents[3]

project_root_str = str(project_root)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from scripts.bootstrap import bootstrap_project

PROJECT_ROOT = bootstrap_project()

from txroads.core.entities import RankedRoadway, RoadwayRecord
from txroads.infrastructure.analytics.estimators import WORKING_DAYS_PER_YEAR, estimate_road_impact
from txroads.infrastructure.analytics.filters import (
    ALL_DISTRICTS,
    DEFAULT_CONGESTION_RANGE,
    compute_map_view,
    filter_roadways,
    find_district,
    list_districts,
    toggle_selection,
)
from txroads.infrastructure.analytics.ranking import rank_by
from txroads.infrastructure.feed.client import ArcGISRoadwayFeed, GeoJSONFileFeed
from txroads.infrastructure.rules.severity import congestion_color
from txroads.use_cases.build_congestion_story import (
    BuildCongestionStoryUseCase,
    CongestionStory,
    StoryLimits,
)
from txroads.utils.config import DEFAULT_FEED_URL, AppConfig, load_config
from txroads.utils.formatting import format_currency, format_number, format_percent, format_time
from txroads.utils.logger import logger

CONFIG_PATH = PROJECT_ROOT / "configs" / "config.yaml"


@st.cache_data
def load_app_config(path: Path) -> AppConfig:
    return load_config(path)


@st.cache_resource
def load_story(config: AppConfig) -> CongestionStory:
    """Fetch the feed once per session; a saved snapshot wins when present."""
    feed_config = config.get("feed", {})
    snapshot = feed_config.get("snapshot_path")
    snapshot_path = PROJECT_ROOT / snapshot if snapshot else None
    if snapshot_path is not None and snapshot_path.exists():
        logger.info("Using roadway snapshot {}", snapshot_path)
        feed = GeoJSONFileFeed(snapshot_path)
    else:
        feed = ArcGISRoadwayFeed(
            url=feed_config.get("url", DEFAULT_FEED_URL),
            timeout=float(feed_config.get("timeout", 30.0)),
        )
    limits = StoryLimits.from_config(config.get("views"))
    return BuildCongestionStoryUseCase(feed, limits).execute()


def _ranking_frame(ranking: Sequence[RankedRoadway], value_label: str) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Roadway": [item.display_name for item in ranking],
            "District": [item.record.district for item in ranking],
            value_label: [item.value for item in ranking],
        }
    ).set_index("Roadway")


def render_overview(story: CongestionStory) -> None:
    overview = story.cost_overview
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Roadways", len(story.records))
    col2.metric("Annual cost of delay", format_currency(overview.total_cost))
    col3.metric("Truck share of cost", format_percent(overview.truck_share))
    col4.metric("Cost per commuter", format_currency(overview.cost_per_commuter))
    col5, col6 = st.columns(2)
    col5.metric(
        "Commuter cost per commuter", format_currency(overview.commuter_cost_per_commuter)
    )
    col6.metric("Truck cost per truck", format_currency(overview.truck_cost_per_truck))
    if story.cost_violations:
        st.warning(
            f"{len(story.cost_violations)} roadway(s) report a truck cost above their total cost."
        )


def render_map_section(story: CongestionStory) -> None:
    st.markdown("### Congestion map")
    districts = list_districts(story.records)
    col1, col2 = st.columns([1, 2])
    with col1:
        district = st.selectbox("District", options=[ALL_DISTRICTS, *districts], index=0)
    with col2:
        low, high = st.slider(
            "Travel time index",
            min_value=DEFAULT_CONGESTION_RANGE[0],
            max_value=DEFAULT_CONGESTION_RANGE[1],
            value=DEFAULT_CONGESTION_RANGE,
            step=0.1,
        )

    filtered = filter_roadways(story.records, district=district, congestion_range=(low, high))
    view = compute_map_view(filtered, district)
    points = [
        {
            "lat": lat,
            "lon": lon,
            "color": congestion_color(record.congestion_index),
        }
        for record in filtered
        for lon, lat in record.geometry.points()
    ]
    st.caption(
        f"{len(filtered)} roadway(s) shown, centred on "
        f"({view.center_lat:.4f}, {view.center_lon:.4f})"
    )
    if points:
        st.map(pd.DataFrame(points), latitude="lat", longitude="lon", color="color", zoom=view.zoom)
    else:
        st.info("No roadways match the current filters.")


def render_road_details(record: RoadwayRecord) -> None:
    impact = estimate_road_impact(record)
    st.markdown(f"#### {record.name}")
    col1, col2, col3 = st.columns(3)
    col1.metric("Travel time index", f"{record.congestion_index:.2f}")
    col2.metric("Delay per mile (hours)", format_number(record.delay_per_mile))
    col3.metric("Cost of delay", format_currency(record.cost_of_delay))
    st.markdown(
        "\n".join(
            [
                f"- {format_number(impact.annual_commuter_hours)} hours lost annually by commuters",
                f"- {format_number(impact.truck_delay_days)} days of truck delay",
                f"- {format_number(impact.fuel_gallons)} gallons of fuel wasted",
                f"- Cost equivalent to {format_number(impact.jobs_equivalent)} full-time jobs",
            ]
        )
    )


def render_rankings_section(story: CongestionStory) -> None:
    st.markdown("### Rankings")
    views = {
        "Overall rank": (story.overall_ranking, "Delay per mile (hours)"),
        "Truck rank": (story.truck_ranking, "Truck delay (hours)"),
        "Cost of delay": (story.cost_ranking, "Cost of delay"),
    }
    for tab, (ranking, label) in zip(st.tabs(list(views)), views.values()):
        with tab:
            st.dataframe(_ranking_frame(ranking, label), use_container_width=True)

    names = [item.full_name for item in story.overall_ranking]
    selected: Optional[str] = st.selectbox("Roadway details", options=["None", *names])
    if selected and selected != "None":
        record = next(item.record for item in story.overall_ranking if item.full_name == selected)
        render_road_details(record)


def render_commuter_section(story: CongestionStory) -> None:
    st.markdown("### Commuter impact")
    st.caption(
        "Commuter counts and hours wasted are heuristic estimates, not measured values."
    )
    severity = pd.DataFrame(
        {
            "Severity": [bucket.label for bucket in story.severity],
            "Roadways": [bucket.road_count for bucket in story.severity],
            "Commuters": [bucket.total_commuters for bucket in story.severity],
            "Cost": [format_currency(bucket.total_cost) for bucket in story.severity],
            "Avg. hours wasted": [round(bucket.avg_time_wasted) for bucket in story.severity],
            "Avg. daily delay": [
                format_time(bucket.avg_time_wasted * 60 / WORKING_DAYS_PER_YEAR)
                for bucket in story.severity
            ],
        }
    ).set_index("Severity")
    st.bar_chart(severity["Commuters"])
    st.dataframe(severity, use_container_width=True)

    impacts = pd.DataFrame(
        {
            "Roadway": [impact.display_name for impact in story.commuter_impacts],
            "Estimated commuters": [impact.estimated_commuters for impact in story.commuter_impacts],
            "Cost per commuter": [
                round(impact.cost_per_commuter, 2) for impact in story.commuter_impacts
            ],
            "Hours wasted per year": [round(impact.time_wasted) for impact in story.commuter_impacts],
        }
    ).set_index("Roadway")
    st.dataframe(impacts, use_container_width=True)


def render_road_type_section(story: CongestionStory) -> None:
    st.markdown("### Road types")
    if not story.road_types:
        st.info("No road type data available.")
        return
    table = pd.DataFrame(
        {
            "Road type": [bucket.road_type for bucket in story.road_types],
            "Roadways": [bucket.count for bucket in story.road_types],
            "Avg. TTI": [round(bucket.avg_congestion, 2) for bucket in story.road_types],
            "Avg. delay per mile": [round(bucket.avg_delay, 1) for bucket in story.road_types],
            "Cost share (%)": [round(bucket.cost_percentage, 1) for bucket in story.road_types],
        }
    ).set_index("Road type")
    st.bar_chart(table["Roadways"])
    st.dataframe(table, use_container_width=True)

    road_type = st.selectbox("Most congested roads of type", options=list(story.top_roads_by_type))
    top_roads = story.top_roads_by_type.get(road_type, ())
    st.dataframe(_ranking_frame(top_roads, "TTI"), use_container_width=True)


def render_regional_section(story: CongestionStory, limits: StoryLimits) -> None:
    st.markdown("### Regional comparison")
    if not story.district_comparison:
        st.info("No district data available.")
        return

    metrics = [value.metric for value in story.district_comparison[0].values]
    grouped = pd.DataFrame(
        [[row.score_for(metric) for metric in metrics] for row in story.district_comparison],
        index=[row.name for row in story.district_comparison],
        columns=metrics,
    )
    st.caption("Values shown as percentage of the maximum across all districts")
    st.bar_chart(grouped)

    metric = st.radio(
        "Single metric",
        options=("road_count", "avg_congestion_index", "total_cost_of_delay"),
        horizontal=True,
    )
    ranked = rank_by(story.districts, metric, limits.district_metric)
    st.bar_chart(pd.Series([getattr(item, metric) for item in ranked], index=[item.name for item in ranked]))

    selected = st.session_state.get("selected_district")
    columns = st.columns(len(story.district_comparison))
    for column, row in zip(columns, story.district_comparison):
        if column.button(row.name, key=f"district-{row.name}"):
            selected = toggle_selection(selected, row.name)
            st.session_state["selected_district"] = selected

    district = find_district(story.districts, selected)
    if district is not None:
        total_cost = story.cost_overview.total_cost
        st.markdown(
            "\n".join(
                [
                    f"#### {district.name}",
                    f"- Roadways in the top 100: **{district.road_count}**",
                    f"- Average travel time index: **{district.avg_congestion_index:.2f}**",
                    f"- Cost of delay: **{format_currency(district.total_cost_of_delay)}**",
                    "- Share of statewide cost: **"
                    + format_percent(100 * district.total_cost_of_delay / total_cost if total_cost else 0.0)
                    + "**",
                ]
            )
        )


def main() -> None:
    st.set_page_config(page_title="Texas Congested Roadways", layout="wide")
    st.title("Texas's 100 most congested roadways")

    config = load_app_config(CONFIG_PATH)
    limits = StoryLimits.from_config(config.get("views"))
    story = load_story(config)
    if story.feed_error:
        st.error("The roadway feed could not be loaded; every view below is empty.")

    render_overview(story)
    render_map_section(story)
    render_rankings_section(story)
    render_commuter_section(story)
    render_road_type_section(story)
    render_regional_section(story, limits)


if __name__ == "__main__":
    main()
