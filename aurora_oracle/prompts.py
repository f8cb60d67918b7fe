from .models import Coordinates


PERSONA = (
    "You are GlareMyAurora, an expert in space weather, physics, and night photography. "
    "Your goal is to provide accurate aurora forecasts and safety advice."
)

CHAT_DIRECTIVE = (
    " You are helpful, concise, and safety-conscious. "
    "Warn users about cold exposure and dark terrain."
)

CHAT_GREETING = (
    "Greetings, Earthling! 🖖 I am GlareMyAurora. "
    "Ask me about solar storms, survival gear, or the science of the lights!"
)

CHAT_FAILURE_REPLY = "Comm link disrupted! Static in the atmosphere... try again."

FORECAST_FAILURE_TEXT = "Unable to fetch space weather data at this moment."


def forecast_prompt(coords: Coordinates) -> str:
    lat, lon = coords.latitude, coords.longitude
    return f"""
Perform a Google Search to find the REAL-TIME current space weather conditions including:
1. Current Kp Index (live value).
2. Solar Wind Speed (km/s).
3. Solar Wind Density (p/cm^3).
4. IMF Bz (nT).
5. Aurora forecast for the next 6 hours.
6. Identify the NEAREST location/region to [{lat}, {lon}] that has actual aurora sightings reported recently OR a magnetometer station showing high activity.
7. Check for significant solar flares (Class M or X) occurring in the past 24 hours. If none, indicate 'None'. If yes, identify the source Sunspot Region (e.g. AR3664) and estimated arrival time (ETA) of any associated CME at Earth.

My location is Latitude: {lat}, Longitude: {lon}.

Calculate a "Probability Score" (0-100) for seeing aurora RIGHT NOW based on:
- Latitude (Need Kp ~4 for 55°, Kp ~6 for 50°, Kp ~7+ for 45°).
- Bz (Negative is better, <-5nT is great).
- Speed (>500 km/s is good).
- Density (>10 p/cm^3 is good).

Also determine "Tonight's Window" (best time range to view).

Response Format:
First, provide a friendly readable summary paragraph "Captain's Log".

Second, output a JSON block (wrapped in ```json):
{{
  "kpIndex": number,
  "solarWindSpeed": number,
  "solarWindDensity": number,
  "bz": number,
  "probabilityScore": number,
  "visibilityChance": "Low" | "Moderate" | "High" | "Extreme",
  "tonightsWindow": "string (e.g. 23:00 - 02:00)",
  "nearestDetection": {{
    "location": "City, Country or Station Name",
    "status": "Brief status (e.g. 'Active Storm', 'Visual Sighting', 'Quiet')"
  }},
  "solarFlare": {{
    "class": "Class (e.g. M1.2, X5.0) or 'None'",
    "time": "Time of peak or 'N/A'",
    "impact": "Short impact description or 'Quiet Sun'",
    "region": "Sunspot Region (e.g. AR1234) or 'Unknown'",
    "eta": "Estimated CME arrival (e.g. 'Oct 12 18:00 UTC') or 'No CME expected'"
  }},
  "locationName": "City/Region Name",
  "forecast": [
    {{"time": "Now", "kp": number}},
    {{"time": "+1h", "kp": number}},
    {{"time": "+2h", "kp": number}},
    {{"time": "+3h", "kp": number}},
    {{"time": "+4h", "kp": number}},
    {{"time": "+5h", "kp": number}}
  ]
}}
Speeds, densities and Bz are plain numbers without units.
"""


def photo_prompt(device: str) -> str:
    return f"""
Analyze this photo of the sky/environment for Aurora photography suitability.
Device being used: {device}

1. Assess Cloud Cover (Clear, Partly Cloudy, Overcast).
2. Assess Light Pollution/Darkness.
3. Provide specific camera settings (ISO, Shutter, Aperture) optimized for THIS scene.
4. Provide a 3-item checklist for the user to get the best shot.

Output ONLY JSON format:
{{
  "cloudCover": "string",
  "darknessRating": "string",
  "recommendedSettings": {{
    "iso": "string",
    "shutterSpeed": "string",
    "aperture": "string",
    "focus": "string"
  }},
  "checklist": ["item 1", "item 2", "item 3"],
  "feedback": "Short encouraging advice based on the image."
}}
"""
