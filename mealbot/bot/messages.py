"""User-facing texts and button payloads."""

START_CALLBACK = "start"
GET_MEAL_CALLBACK = "get_meal"

START_BUTTON = "Start!"
GET_MEAL_BUTTON = "Get next meal"
RETRY_BUTTON = "Try again"

BOT_STARTED = "🍖 {name}, the bot is up.\nLet the bulking begin!"
BOT_STOPPED = "🍖 {name}, the bot is stopping.\nLet the cutting begin!"

WELCOME_BACK = "👋 Welcome back, {name}! Press the button to get your next meal"
UNKNOWN_USER = "⚠️ Sorry, I don't know you. Ask the administrator for access."
PICKING_MEAL = "👋 Hi, {name}! Picking your next meal now."

ERROR = "❌ Error: {text}"
FETCH_FAILED = "Failed to fetch data"
BAD_STATUS = "Response status is not OK\n{body}"
DECODE_FAILED = "Failed to parse data"

MEAL_HEADER = "🍽 *Next meal:*"
DISH = "🍳 {name}"
RECIPE_HEADER = "📝 Recipe:"
RECIPE_RAW = "📝 Recipe: {raw}"
INGREDIENTS_HEADER = "Ingredients:"

SHOPPING_LIST_HEADER = "🛒 *Shopping list:*"
SHOPPING_LIST_ERROR = "❌ Invalid shopping list format"
