WELCOME = "Your personal productivity assistant.\nSign in to access your dashboard."
ASK_SIGNIN_EMAIL = "Welcome back. Enter your email:"
ASK_SIGNIN_PASSWORD = "Enter your password:"
ASK_SIGNUP_NAME = "Create account. Enter your display name:"
ASK_SIGNUP_EMAIL = "Enter your email:"
ASK_SIGNUP_PASSWORD = "Create a password (at least 6 characters):"
SIGNING_IN = "Signing in..."
CREATING_ACCOUNT = "Creating account..."
SIGN_IN_REQUIRED = "Please sign in first."
