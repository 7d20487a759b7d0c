from dotenv import load_dotenv
load_dotenv()

import logging
import os

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, RedirectResponse

from routers.debug import router as debug_router
from routers.sports import router as sports_router
from routers.streams import router as streams_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="sportsdash")

app.include_router(debug_router)
# streams before sports: /api/{sport}/{league} would swallow /api/streams/*
app.include_router(streams_router)
app.include_router(sports_router)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/ui")


@app.get("/ui", response_class=HTMLResponse)
def ui():
    return """
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Scoreboard</title>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 20px; }
    .row { display: flex; gap: 12px; flex-wrap: wrap; align-items: center; }
    button, select, input { padding: 8px 10px; font-size: 14px; }
    button { cursor: pointer; }
    button:disabled { opacity: .35; cursor: not-allowed; }
    .error { color: #b00020; white-space: pre-wrap; margin-top: 12px; }
    .warning { color: #8a6d00; margin-top: 12px; }
    .muted { color: #666; font-size: 12px; }
    .strip button { font-size: 12px; padding: 5px 9px; border-radius: 4px; border: 1px solid #ddd; background: #f6f6f6; }
    .strip button.sel { background: #c62828; color: #fff; border-color: #c62828; }
    .strip button.today { background: #e8f5e9; }
    h2 { font-size: 16px; margin-top: 22px; }
    .table-wrap { width: 100%; overflow-x: auto; border: 1px solid #e5e5e5; border-radius: 10px; }
    table { border-collapse: collapse; width: 100%; min-width: 560px; }
    th, td { border-bottom: 1px solid #e5e5e5; padding: 8px; text-align: left; font-size: 14px; }
    th { font-size: 12px; color: #444; text-transform: uppercase; letter-spacing: .04em; }
    @media (max-width: 640px) {
      body { margin: 12px; }
      th, td { padding: 10px 8px; font-size: 13px; }
    }
  </style>
</head>
<body>
  <h1>Scoreboard</h1>

  <div class="row">
    <img id="leagueLogo" alt="" style="width: 32px; height: 32px; object-fit: contain;" hidden />
    <select id="league"></select>
    <button id="prevBtn" title="Previous game day">&larr;</button>
    <input type="date" id="dateInput" />
    <button id="nextBtn" title="Next game day">&rarr;</button>
    <button id="todayBtn">Today</button>
    <button id="reloadBtn">Reload</button>
    <span class="muted" id="countLabel"></span>
    <a class="muted" href="/ui/streams">Stream URL tools</a>
  </div>

  <div class="row strip" id="strip" style="margin-top: 10px;"></div>
  <div id="warning" class="warning"></div>
  <div id="error" class="error"></div>
  <div id="sections"></div>

<script>
  const $ = (id) => document.getElementById(id);

  let board = null;
  let sport = "basketball";
  let league = "nba";
  let date = null;   // YYYYMMDD or null for ESPN's current board

  function formatLocalTime(utcIso) {
    if (!utcIso) return "";
    return new Intl.DateTimeFormat(undefined, { hour: "numeric", minute: "2-digit" }).format(new Date(utcIso));
  }

  async function loadLeagues() {
    const resp = await fetch("/api/sports");
    const data = await resp.json();
    for (const s of data.sports) {
      const group = document.createElement("optgroup");
      group.label = `${s.icon} ${s.name}`;
      for (const l of s.leagues) {
        const opt = document.createElement("option");
        opt.value = `${s.sport}/${l.slug}`;
        opt.textContent = l.name;
        opt.dataset.logo = l.logo || "";
        group.appendChild(opt);
      }
      $("league").appendChild(group);
    }
    $("league").value = `${sport}/${league}`;
    showLogo();
  }

  function showLogo() {
    const opt = $("league").selectedOptions[0];
    const src = opt ? opt.dataset.logo : "";
    $("leagueLogo").hidden = !src;
    if (src) $("leagueLogo").src = src;
  }

  function renderSection(title, games) {
    if (!games.length) return;
    const h = document.createElement("h2");
    h.textContent = `${title} (${games.length})`;
    $("sections").appendChild(h);

    const wrap = document.createElement("div");
    wrap.className = "table-wrap";
    const tbl = document.createElement("table");
    tbl.innerHTML = "<thead><tr><th>Start</th><th>Matchup</th><th>Score</th><th>Status</th><th>Network</th></tr></thead>";
    const tbody = document.createElement("tbody");

    for (const g of games) {
      const tr = document.createElement("tr");
      const away = g.away ? g.away.short_name : "";
      const home = g.home ? g.home.short_name : "";
      const score = g.status_state === "pre" ? "" : `${g.away?.score ?? "-"} - ${g.home?.score ?? "-"}`;
      for (const text of [formatLocalTime(g.start_utc), away && home ? `${away} @ ${home}` : g.name, score, g.status_detail || "", g.network || ""]) {
        const td = document.createElement("td");
        td.textContent = text;
        tr.appendChild(td);
      }
      tbody.appendChild(tr);
    }
    tbl.appendChild(tbody);
    wrap.appendChild(tbl);
    $("sections").appendChild(wrap);
  }

  function renderNav(nav) {
    $("dateInput").value = nav.selected_display;
    $("prevBtn").disabled = !nav.has_prev;
    $("nextBtn").disabled = !nav.has_next;
    $("countLabel").textContent = nav.count ? `${nav.count} game days` : "";

    $("strip").innerHTML = "";
    if (!nav.nearby.length) return;
    const label = document.createElement("span");
    label.className = "muted";
    label.textContent = "Jump to:";
    $("strip").appendChild(label);
    for (const d of nav.nearby) {
      const b = document.createElement("button");
      b.textContent = d.today ? "Today" : d.display;
      if (d.selected) b.className = "sel";
      else if (d.today) b.className = "today";
      b.addEventListener("click", () => go(d.date));
      $("strip").appendChild(b);
    }
  }

  async function loadBoard() {
    $("error").textContent = "";
    $("warning").textContent = "";
    $("sections").innerHTML = "";

    const qs = date ? `?date=${date}` : "";
    let resp, data;
    try {
      resp = await fetch(`/api/${sport}/${league}/scoreboard${qs}`);
      data = await resp.json();
    } catch (e) {
      $("error").textContent = `Failed to load scoreboard\n${e}`;
      return;
    }
    if (!resp.ok) {
      $("error").textContent = JSON.stringify(data, null, 2);
      return;
    }

    board = data;
    renderNav(data.navigation);
    if (data.warning) $("warning").textContent = data.warning;
    renderSection("Live Now", data.live);
    renderSection("Upcoming", data.upcoming);
    renderSection("Final", data.completed);
    if (!data.count) $("sections").textContent = "No games scheduled for this date.";
  }

  function go(d) {
    date = d;
    loadBoard();
  }

  $("league").addEventListener("change", (e) => {
    [sport, league] = e.target.value.split("/");
    showLogo();
    date = null;
    loadBoard();
  });
  $("prevBtn").addEventListener("click", () => board && board.navigation.prev && go(board.navigation.prev));
  $("nextBtn").addEventListener("click", () => board && board.navigation.next && go(board.navigation.next));
  $("dateInput").addEventListener("change", (e) => go(e.target.value.replace(/-/g, "")));
  $("todayBtn").addEventListener("click", () => go(null));
  $("reloadBtn").addEventListener("click", loadBoard);

  // live games move; refresh every 30s
  setInterval(loadBoard, 30000);

  loadLeagues().then(loadBoard);
</script>

</body>
</html>
"""


@app.get("/ui/streams", response_class=HTMLResponse)
def ui_streams():
    return """
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <title>Stream URL Tools</title>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 20px; max-width: 900px; }
    section { border: 1px solid #e5e5e5; border-radius: 10px; padding: 12px 16px; margin-top: 16px; }
    .row { display: flex; gap: 12px; flex-wrap: wrap; align-items: center; }
    button, select, input, textarea { padding: 8px 10px; font-size: 14px; }
    input[type=text], textarea { flex: 1; min-width: 280px; font-family: ui-monospace, monospace; }
    textarea { width: 100%; box-sizing: border-box; height: 90px; }
    pre { background: #f6f6f6; padding: 10px; border-radius: 6px; white-space: pre-wrap; word-break: break-all; }
    .error { color: #b00020; }
    .muted { color: #666; font-size: 12px; }
  </style>
</head>
<body>
  <a class="muted" href="/ui">&larr; Scoreboard</a>
  <h1>Stream URL Tools</h1>

  <section>
    <h2>Build</h2>
    <div class="row">
      <input type="text" id="uuid" placeholder="a3c7030e-be5c-462c-bfc0-eedb51242afe" />
      <input type="date" id="day" />
      <select id="category"></select>
      <button id="buildBtn">Build</button>
    </div>
    <pre id="built" hidden></pre>
  </section>

  <section>
    <h2>Parse</h2>
    <div class="row">
      <input type="text" id="url" placeholder="https://service-pkgespn.akamaized.net/opp/hls/espn/..." />
      <button id="parseBtn">Parse</button>
    </div>
    <pre id="parsed" hidden></pre>
  </section>

  <section>
    <h2>Extract UUIDs</h2>
    <textarea id="text" placeholder="Paste network logs, HTML or JSON"></textarea>
    <div class="row"><button id="extractBtn">Extract</button><span class="muted" id="found"></span></div>
    <pre id="uuids" hidden></pre>
  </section>

  <section>
    <h2>Finding UUIDs</h2>
    <pre id="help"></pre>
  </section>

<script>
  const $ = (id) => document.getElementById(id);

  function show(id, text, isError) {
    $(id).hidden = false;
    $(id).className = isError ? "error" : "";
    $(id).textContent = text;
  }

  async function getJson(url, opts) {
    const resp = await fetch(url, opts);
    const data = await resp.json();
    return [resp.ok, data];
  }

  async function init() {
    $("day").value = new Date().toISOString().slice(0, 10);
    const [, cats] = await getJson("/api/streams/categories");
    for (const [slug, label] of Object.entries(cats)) {
      const opt = document.createElement("option");
      opt.value = slug;
      opt.textContent = label;
      $("category").appendChild(opt);
    }
    const [, help] = await getJson("/api/streams/instructions");
    $("help").textContent = help.markdown;
  }

  $("buildBtn").addEventListener("click", async () => {
    const uuid = $("uuid").value.trim();
    if (!uuid) return;
    const qs = new URLSearchParams({ uuid, date: $("day").value, category: $("category").value });
    const [ok, data] = await getJson(`/api/streams/build?${qs}`);
    show("built", ok ? data.m3u8_url : JSON.stringify(data.detail), !ok);
  });

  $("parseBtn").addEventListener("click", async () => {
    const qs = new URLSearchParams({ url: $("url").value });
    const [, data] = await getJson(`/api/streams/parse?${qs}`);
    if (!data.match) return show("parsed", data.reason, true);
    const lines = [data.display];
    if (data.uuid_mismatch) lines.push("Warning: the two UUID segments differ");
    show("parsed", lines.join("\\n"), false);
  });

  $("extractBtn").addEventListener("click", async () => {
    const [, data] = await getJson("/api/streams/extract", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify({ text: $("text").value }),
    });
    $("found").textContent = `${data.count} found`;
    show("uuids", data.uuids.join("\\n") || "No UUIDs found", false);
  });

  init();
</script>

</body>
</html>
"""
