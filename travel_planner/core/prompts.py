currency_converter_instructions = """You are a currency conversion specialist. Convert budgets to local currencies, provide exchange rate information, suggest optimal currency strategies, and explain exchange fees. Help travelers understand their spending power."""

weather_advisor_instructions = """You are a weather and packing specialist. Analyze forecasts, provide packing recommendations, suggest activity modifications based on conditions, warn about severe weather, and recommend best times for outdoor activities."""

local_knowledge_instructions = """You are a local knowledge expert. Provide cultural insights, safety tips, local transportation, authentic experiences, customs, tipping practices, emergency contacts, useful phrases, and common scams. Help travelers feel confident and respectful in their destination."""

itinerary_planner_instructions = """You are an expert travel itinerary planner. Create detailed day-by-day plans with specific timing, realistic travel times, actual venues, meal recommendations, and weather considerations. Balance popular sites with hidden gems. Match activities to interests and travel style."""

budget_optimizer_instructions = """You are a travel budget optimization expert. Allocate budgets across accommodation, food, activities, and transport. Provide realistic cost estimates, suggest cost-saving strategies, identify low-cost alternatives, and always include an emergency fund."""


currency_advice_prompt = """Provide currency advice for a traveler going to {destination}:

Budget: {conversion_summary}

Please advise on:
1. Current exchange rate and what it means for their budget
2. Best practices for currency exchange (before travel vs. at destination)
3. Typical costs in {destination} to help them understand their spending power
4. Any currency-related tips or warnings for {destination}"""


weather_advice_prompt = """Provide weather-based travel advice for {destination}:

WEATHER FORECAST:
{weather_details}

TRAVELER INTERESTS: {interests}

Please provide:
1. Weather overview and what to expect
2. Detailed packing list based on these conditions
3. Activity recommendations that work well with this weather
4. Any weather-related warnings or precautions
5. Best times of day for outdoor activities

Tailor your advice to their interests: {interests}"""


local_knowledge_prompt = """Provide comprehensive local knowledge for {destination}:

TRAVELER INTERESTS: {interests}
{special_requests}

Please provide:

1. CULTURAL INSIGHTS:
   - Local customs and etiquette
   - Dress codes and cultural sensitivity
   - Tipping practices and expectations

2. SAFETY & PRACTICAL INFO:
   - General safety tips
   - Areas to be cautious of (if any)
   - Emergency numbers (police, ambulance, fire)
   - Nearest embassy/consulate information

3. TRANSPORTATION:
   - How to get around (public transit, taxis, etc.)
   - Transportation apps or cards to download
   - Typical costs

4. LOCAL FAVORITES:
   - Hidden gems and local spots
   - Authentic experiences beyond tourist areas
   - Local food specialties to try

5. COMMUNICATION:
   - Common phrases in the local language
   - English availability
   - Useful translation apps

6. PRACTICAL TIPS:
   - Best areas to stay
   - When shops/restaurants typically open/close
   - Common scams to watch out for
   - Cell phone/data options

Tailor advice to their interests: {interests}"""


itinerary_prompt = """Create a detailed {days_number}-day itinerary for {destination}:

TRAVEL DETAILS:
- Destination: {destination}
- Dates: {start_date} to {end_date} ({days_number} days)
- Budget: ${budget} USD
- Interests: {interests}
- Travel Style: {travel_style}
{special_requests}

WEATHER FORECAST:
{weather_summary}

LOCAL KNOWLEDGE & TIPS:
{local_knowledge}

Please create a comprehensive day-by-day itinerary with the following structure for EACH day:

DAY [X] - [Date] - [Theme/Focus]

MORNING (9:00 AM - 12:00 PM):
- Activity: [Specific venue/attraction name]
- Description: [What to do and why it's special]
- Duration: [How long to spend]
- Cost estimate: $[amount]
- Weather consideration: [Adjust for forecast if needed]

LUNCH (12:00 PM - 1:30 PM):
- Restaurant/Area: [Specific recommendation]
- Cuisine: [Type of food]
- Description: [Why this choice]
- Cost estimate: $[amount]

AFTERNOON (2:00 PM - 6:00 PM):
- Activity: [Specific venue/attraction name]
- Description: [What to do and why it's special]
- Duration: [How long to spend]
- Cost estimate: $[amount]
- Weather consideration: [Adjust for forecast if needed]

DINNER (7:00 PM - 9:00 PM):
- Restaurant/Area: [Specific recommendation]
- Cuisine: [Type of food]
- Description: [Why this choice]
- Cost estimate: $[amount]

DAILY TIPS:
- [Transportation advice for the day]
- [Any reservations needed]
- [Weather-specific tips]
- [Time-saving suggestions]

---

Please create this detailed structure for all {days_number} days. Make sure:
1. Activities match their interests: {interests}
2. The {travel_style} travel style is reflected
3. Weather forecast is considered for each day
4. Budget stays within ${budget}
5. Include both popular sites and local experiences
6. Timing is realistic with travel time between locations"""


budget_prompt = """Optimize the budget allocation for a {days_number}-day trip to {destination}:

BUDGET: ${total_budget} USD
TRAVEL STYLE: {travel_style}
DURATION: {days_number} days

PLANNED ACTIVITIES:
{itinerary_summary}

Please provide a detailed budget breakdown:

1. BUDGET ALLOCATION (provide specific dollar amounts that total ${total_budget}):
   - Accommodation: $[amount] ([percentage]% - explain choice)
   - Food & Dining: $[amount] ([percentage]% - meals/day estimate)
   - Activities & Attractions: $[amount] ([percentage]% - based on planned activities)
   - Transportation: $[amount] ([percentage]% - flights, local transport, etc.)
   - Shopping & Souvenirs: $[amount] ([percentage]%)
   - Emergency Fund: $[amount] ([percentage]% - always include 5-10%)

2. DAILY BUDGET GUIDELINE:
   - Daily spending target: $[amount]/day
   - Per meal budget: Breakfast $[X], Lunch $[Y], Dinner $[Z]
   - Activities budget per day: $[amount]

3. COST-SAVING TIPS FOR {destination}:
   - [Specific tip 1]
   - [Specific tip 2]
   - [Specific tip 3]

4. BUDGET WARNINGS:
   - [Any seasonal pricing concerns]
   - [Hidden costs to watch for]
   - [Activities that may exceed budget]

Ensure the breakdown matches the {travel_style} style and totals exactly ${total_budget}."""
