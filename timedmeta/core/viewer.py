"""
Static HTML viewer for a video and its WebVTT metadata track.

The page plays the HLS rendition, draws the boxes of the active cue on a
canvas overlay and, while paused, lists the detected entities so a link that
replays the current instant for the selected ids can be copied. Opening such
a link (``#:video:<seconds>=<id,id>``) seeks there and only draws those ids.
"""

import html
from string import Template

_VIEWER_TEMPLATE = Template("""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>$title</title>
  <style>
    body {
      display: flex;
      flex-direction: column;
      justify-content: flex-start;
      align-items: flex-start;
      height: 100vh;
      background-color: #f0f0f0;
    }
    video {
      width: 60%;
      height: auto;
      border: 2px solid #333;
      border-radius: 10px;
      box-shadow: 0 4px 8px rgba(0, 0, 0, 0.2);
    }
    button {
      margin: 10px;
      padding: 10px 20px;
      font-size: 1em;
    }
    .overlay {
      display: none;
      position: absolute;
      background-color: rgba(0, 0, 0, 0.0);
      pointer-events: none;
    }
    .ctrl {
      display: none;
      background-color: rgba(0, 0, 0, 0.7);
      color: white;
      padding: 10px;
      border-radius: 5px;
      font-size: 1.2em;
      text-align: left;
      width: 60%;
      max-width: 800px;
    }
  </style>
</head>
<body>
  <video>
    <source src="$video_path" type="application/vnd.apple.mpegurl" />
    <track src="$vtt_path" kind="metadata" srclang="en" default />
    Your browser does not support the video tag.
  </video>
  <canvas class="overlay"></canvas>
  <div>
    <button id="play">Play</button>
  </div>
  <div class="ctrl"></div>
  <script>
    const video = document.querySelector('video');
    const playButton = document.querySelector('#play');
    const track = video.querySelector('track');
    const ctrl = document.querySelector('.ctrl');
    const canvas = document.querySelector('.overlay');
    const ctx = canvas.getContext('2d');
    const hashPrefix = '#:video:';

    function getReplayMode() {
      if (window.location.hash.startsWith(hashPrefix)) {
        const parts = window.location.hash.slice(hashPrefix.length).split('=');
        return {replayMode: true, startTime: parseFloat(parts[0]) || 0, ids: (parts[1] || '').split(',')};
      }
      return {replayMode: false, startTime: 0, ids: []};
    }

    const {replayMode, startTime, ids} = getReplayMode();

    playButton.addEventListener('click', () => {
      if (video.paused) {
        video.play();
        playButton.textContent = 'Pause';
      } else {
        video.pause();
        playButton.textContent = 'Play';
      }
    });

    video.addEventListener('canplay', () => {
      if (startTime && video.currentTime === 0) {
        video.currentTime = startTime;
      }
    }, {once: true});

    video.addEventListener('play', () => {
      canvas.style.display = replayMode ? 'block' : 'none';
      ctrl.style.display = 'none';
    });
    video.addEventListener('pause', () => {
      if (!replayMode) {
        canvas.style.display = 'block';
        ctrl.style.display = 'block';
      }
    });
    video.addEventListener('ended', () => {
      if (!replayMode) {
        canvas.style.display = 'none';
        ctrl.style.display = 'none';
      }
    });

    track.addEventListener('cuechange', () => {
      const width = video.clientWidth;
      const height = video.clientHeight;
      canvas.width = width;
      canvas.height = height;
      ctx.clearRect(0, 0, width, height);
      ctx.strokeStyle = 'red';
      ctx.lineWidth = 4;
      ctx.fillStyle = 'red';
      ctx.font = '20px serif';
      ctrl.innerHTML = '';

      const cues = track.track.activeCues;
      if (!cues || cues.length === 0) {
        return;
      }
      let metadataList;
      try {
        metadataList = JSON.parse(cues[0].text);
      } catch (e) {
        return;
      }
      const form = document.createElement('form');
      for (const metadata of metadataList) {
        const {name, boxes, id} = metadata;
        if (replayMode && !ids.includes(id)) {
          continue;
        }
        for (const box of boxes) {
          const x = box.Left * width;
          const y = box.Top * height;
          ctx.strokeRect(x, y, box.Width * width, box.Height * height);
          ctx.fillText(name, x, y - 4);
        }
        if (id === undefined) {
          continue;
        }
        const input = document.createElement('input');
        input.type = 'checkbox';
        input.id = id;
        input.addEventListener('change', () => {
          const checkedList = form.querySelectorAll('input[type="checkbox"]:checked');
          form.querySelector('#copy-link').disabled = checkedList.length === 0;
        });
        const label = document.createElement('label');
        label.textContent = name;
        label.appendChild(input);
        const div = document.createElement('div');
        div.appendChild(label);
        form.appendChild(div);
      }
      const button = document.createElement('button');
      button.textContent = 'Copy Link';
      button.disabled = true;
      button.id = 'copy-link';
      button.addEventListener('click', (e) => {
        e.preventDefault();
        const checkedList = form.querySelectorAll('input[type="checkbox"]:checked');
        const selected = Array.from(checkedList).map(input => input.id);
        const base = window.location.href.split('#')[0];
        const url = base + hashPrefix + video.currentTime + '=' + selected.join(',');
        navigator.clipboard.writeText(url);
        console.log(url);
      });
      const div = document.createElement('div');
      div.appendChild(button);
      form.appendChild(div);
      ctrl.appendChild(form);
    });
  </script>
</body>
</html>
""")


def render_viewer(video_path: str, vtt_path: str, title: str = "Video with WebVTT timed metadata") -> str:
    """Render the viewer page for an HLS playlist and its metadata track."""
    return _VIEWER_TEMPLATE.substitute(
        title=html.escape(title),
        video_path=html.escape(video_path),
        vtt_path=html.escape(vtt_path),
    )
