#*****************************************************************
#
#  PROJECT:     Food Distribution Dashboard
#
#  CLASS:       Dashboard Data Pipeline
#
#  FILE:        generate_dashboard.py
#
#  DESCRIPTION: Full page dashboard generator that takes the per year pie
#               slices and the annotated map layers and produces a self
#               contained Chart.js + Leaflet HTML file with all data embedded
#               as JSON. The generated file works offline apart from the CDN
#               scripts and map tiles.
#
#*****************************************************************

import html
import json
import os
import logging
from datetime import datetime

from choropleth import buildLegendEntries

logger = logging.getLogger(__name__)


class DashboardGenerator:

#*****************************************************************
#
#  Function name: __init__
#
#  DESCRIPTION:   Initializes the DashboardGenerator with the output directory
#                 and the configuration holding map and legend settings.
#
#  Parameters:    config (Config) : pipeline configuration
#                 output_dir (str) : path for HTML output (default: 'output')
#
#  Return values: None (constructor)
#
#*****************************************************************

    def __init__(self, config, output_dir='output'):
        self.config = config
        self.output_dir = output_dir


#*****************************************************************
#
#  Function name: fmtPounds
#
#  DESCRIPTION:   Formats a pound total into a compact display string like
#                 1.2M lbs or 523K lbs for the stat cards.
#
#  Parameters:    val (float) : pounds to format
#
#  Return values: str : formatted string
#
#*****************************************************************

    def fmtPounds(self, val):
        if val >= 1e6:
            return f'{val/1e6:.1f}M lbs'
        if val >= 1e3:
            return f'{val/1e3:.0f}K lbs'
        return f'{val:.0f} lbs'


#*****************************************************************
#
#  Function name: buildChartCards
#
#  DESCRIPTION:   Builds one card per configured chart. Charts whose source
#                 could not be loaded, or that have no positive slices, show
#                 a note instead of a canvas so the other charts still render.
#
#  Parameters:    charts (list) : chart results from the pipeline
#
#  Return values: str : HTML for the chart grid
#
#*****************************************************************

    def buildChartCards(self, charts):
        cards = []
        for chart in charts:
            title = html.escape(chart['title'])
            if not chart['success']:
                body = f'<div class="chart-note">Could not load {html.escape(chart["file"])}</div>'
            elif not chart['slices']:
                body = '<div class="chart-note">No pounds recorded for the target counties</div>'
            else:
                body = f'<div class="chart-wrap"><canvas id="{html.escape(chart["canvas_id"])}"></canvas></div>'
            cards.append(f'<div class="chart-card"><div class="chart-title">{title}</div>{body}</div>')
        return '\n        '.join(cards)


#*****************************************************************
#
#  Function name: buildStatCards
#
#  DESCRIPTION:   Builds one stat card per loaded log with its total pounds and
#                 the rows that fell in the target counties.
#
#  Parameters:    charts (list) : chart results from the pipeline
#
#  Return values: str : HTML for the stats row
#
#*****************************************************************

    def buildStatCards(self, charts):
        cards = []
        for chart in charts:
            if not chart['success']:
                continue
            summary = chart['summary']
            cards.append(
                f'<div class="stat-card"><div class="stat-label">{html.escape(chart["file"])}</div>'
                f'<div class="stat-value">{self.fmtPounds(summary["total_lbs"])}</div>'
                f'<div class="stat-sub">{summary["target_row_count"]:,} rows in target counties</div></div>'
            )
        return '\n        '.join(cards)


#*****************************************************************
#
#  Function name: embedJson
#
#  DESCRIPTION:   Serializes a value for a script block, escaping closing tags
#                 so embedded popup HTML cannot end the page script.
#
#  Parameters:    value : JSON serializable value
#
#  Return values: str : JSON text safe inside script
#
#*****************************************************************

    def embedJson(self, value):
        return json.dumps(value).replace("</", "<\\/")


#*****************************************************************
#
#  Function name: buildLegend
#
#  DESCRIPTION:   Builds the poverty legend HTML from the configured threshold
#                 table.
#
#  Parameters:    None
#
#  Return values: str : legend HTML
#
#*****************************************************************

    def buildLegend(self):
        rows = buildLegendEntries(self.config.POVERTY_THRESHOLDS, self.config.MISSING_DATA_COLOR)
        items = [
            f'<div><span class="swatch" style="background:{color}"></span>{html.escape(label)}</div>'
            for label, color in rows
        ]
        return '<div class="legend"><strong>Poverty %</strong>' + ''.join(items) + '</div>'


#*****************************************************************
#
#  Function name: generate
#
#  DESCRIPTION:   Builds the complete HTML dashboard and writes it to a
#                 timestamped file in the output directory.
#
#  Parameters:    charts (list) : chart results with slices or an error
#                 county_layer (dict) : annotated county FeatureCollection or None
#                 tract_layer (dict) : annotated tract FeatureCollection or None
#
#  Return values: str : path to the generated HTML file
#
#*****************************************************************

    def generate(self, charts, county_layer=None, tract_layer=None):
        timestamp = datetime.now().strftime(self.config.EXPORT_TIMESTAMP_FORMAT)
        output_path = os.path.join(self.output_dir, f'dashboard_{timestamp}.html')

        page = self.buildHtml(charts, county_layer, tract_layer)

        os.makedirs(self.output_dir, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(page)

        logger.info(f'Dashboard generated -> {output_path}')
        return output_path


#*****************************************************************
#
#  Function name: buildHtml
#
#  DESCRIPTION:   Builds the complete self contained HTML string with embedded
#                 CSS, the chart and map data as JSON, and the script that
#                 draws the pies, the county layer and the tract toggle.
#
#  Parameters:    charts (list) : chart results
#                 county_layer (dict) : annotated counties or None
#                 tract_layer (dict) : annotated tracts or None
#
#  Return values: str : complete HTML document as a string
#
#*****************************************************************

    def buildHtml(self, charts, county_layer, tract_layer):
        c = self.config
        pies = [
            {
                'canvasId': chart['canvas_id'],
                'title': chart['title'],
                'labels': [s['label'] for s in chart['slices']],
                'data': [s['value'] for s in chart['slices']],
                'tooltips': [s['tooltip'] for s in chart['slices']],
            }
            for chart in charts if chart['success'] and chart['slices']
        ]
        map_settings = {
            'center': list(c.MAP_CENTER),
            'zoom': c.MAP_ZOOM,
            'tileUrl': c.TILE_URL,
            'attribution': c.TILE_ATTRIBUTION,
            'maxZoom': c.TILE_MAX_ZOOM,
        }

        pies_json = self.embedJson(pies)
        map_json = self.embedJson(map_settings)
        counties_json = self.embedJson(county_layer)
        tracts_json = self.embedJson(tract_layer)
        legend_json = self.embedJson(self.buildLegend())
        generated_date = datetime.now().strftime('%B %d, %Y at %I:%M %p')

        return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Food Distribution Dashboard</title>
    <script src="https://cdn.jsdelivr.net/npm/chart.js@4.4.0/dist/chart.umd.min.js"></script>
    <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css">
    <script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
    <style>
        *{{margin:0;padding:0;box-sizing:border-box;}}
        body{{font-family:sans-serif;background:#f4f6f8;color:#1c2430;}}
        .container{{max-width:1280px;margin:0 auto;padding:2rem 1.5rem 3rem;}}
        h1{{font-size:1.5rem;margin-bottom:1.2rem;}}
        .stats-row{{display:grid;grid-template-columns:repeat(auto-fit,minmax(200px,1fr));gap:1rem;margin-bottom:1.5rem;}}
        .stat-card,.chart-card,.map-card{{background:#fff;border-radius:12px;padding:1.2rem 1.4rem;box-shadow:0 2px 12px rgba(0,0,0,0.08);}}
        .stat-label{{font-size:0.7rem;text-transform:uppercase;letter-spacing:1.5px;color:#6b7683;font-weight:600;}}
        .stat-value{{font-size:1.5rem;font-weight:600;margin-top:0.2rem;}}
        .stat-sub{{font-size:0.75rem;color:#1b998b;margin-top:0.15rem;}}
        .charts-grid{{display:grid;grid-template-columns:repeat(auto-fit,minmax(320px,1fr));gap:1.5rem;margin-bottom:1.5rem;}}
        .chart-title{{font-weight:600;margin-bottom:0.8rem;}}
        .chart-wrap{{position:relative;height:320px;}}
        .chart-note{{color:#b03a2e;font-size:0.9rem;padding:2rem 0;text-align:center;}}
        .map-header{{display:flex;justify-content:space-between;align-items:center;margin-bottom:0.8rem;}}
        #map{{height:520px;border-radius:8px;}}
        .toggle-btn{{padding:0.4rem 0.9rem;border-radius:20px;border:1.5px solid #1b998b;background:#fff;color:#1b998b;cursor:pointer;font-weight:500;}}
        .legend{{background:#fff;padding:0.5rem 0.7rem;border-radius:6px;font-size:0.75rem;line-height:1.5;box-shadow:0 1px 6px rgba(0,0,0,0.2);}}
        .swatch{{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;}}
        .footer{{text-align:center;color:#6b7683;font-size:0.75rem;margin-top:2rem;}}
    </style>
</head>
<body>
<div class="container">
    <h1>Food Distribution Dashboard</h1>
    <div class="stats-row">
        {self.buildStatCards(charts)}
    </div>
    <div class="charts-grid">
        {self.buildChartCards(charts)}
    </div>
    <div class="map-card">
        <div class="map-header"><div class="chart-title">Target Counties</div><button class="toggle-btn" id="toggleTracts">Hide Tracts</button></div>
        <div id="map"></div>
    </div>
    <div class="footer">Generated {generated_date}</div>
</div>
<script>
const PIES={pies_json};
const MAP={map_json};
const COUNTIES={counties_json};
const TRACTS={tracts_json};
const LEGEND_HTML={legend_json};
function drawPies(){{PIES.forEach(p=>{{new Chart(document.getElementById(p.canvasId).getContext('2d'),{{type:'pie',data:{{labels:p.labels,datasets:[{{data:p.data}}]}},options:{{responsive:true,maintainAspectRatio:false,plugins:{{title:{{display:true,text:p.title}},tooltip:{{callbacks:{{label:ctx=>p.tooltips[ctx.dataIndex]}}}}}}}}}});}});}}
function featureLayer(geojson){{return L.geoJSON(geojson,{{style:f=>f.properties._style,onEachFeature:(f,layer)=>layer.bindPopup(f.properties._popup)}});}}
function initMap(){{const map=L.map('map').setView(MAP.center,MAP.zoom);L.tileLayer(MAP.tileUrl,{{attribution:MAP.attribution,maxZoom:MAP.maxZoom}}).addTo(map);if(COUNTIES){{const countyLayer=featureLayer(COUNTIES).addTo(map);if(countyLayer.getLayers().length)map.fitBounds(countyLayer.getBounds());}}const btn=document.getElementById('toggleTracts');if(!TRACTS){{btn.disabled=true;btn.textContent='Tracts Unavailable';return;}}const tractLayer=featureLayer(TRACTS).addTo(map);const legend=L.control({{position:'bottomright'}});legend.onAdd=()=>{{const d=L.DomUtil.create('div');d.innerHTML=LEGEND_HTML;return d;}};legend.addTo(map);let tractsOn=true;btn.addEventListener('click',()=>{{if(!tractsOn){{tractLayer.addTo(map);legend.addTo(map);btn.textContent='Hide Tracts';tractsOn=true;}}else{{map.removeLayer(tractLayer);legend.remove();btn.textContent='Show Tracts';tractsOn=false;}}}});}}
document.addEventListener('DOMContentLoaded',()=>{{initMap();drawPies();}});
</script>
</body>
</html>'''
