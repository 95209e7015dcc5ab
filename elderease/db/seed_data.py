"""
Tutorial catalog seed.

The only in-code copy of tutorial content. It is loaded into the
database by ``elderease.db.init_db.seed_catalog`` and doubles as the
fixture set for tests; the running app always reads the database.
"""

FACEBOOK_BASICS_VIDEO = "https://www.youtube.com/watch?v=m1H0yLa_1gA"
FACEBOOK_PRIVACY_VIDEO = "https://www.youtube.com/watch?v=UYzLJ4Nu92c"
WHATSAPP_VIDEO = "https://www.youtube.com/watch?v=fsh-b7Xo10w"
WHATSAPP_GROUPS_VIDEO = "https://www.youtube.com/watch?v=6N7Vf4k9p_c"
YOUTUBE_VIDEO = "https://www.youtube.com/watch?v=9mC6o-_w-Hc"


TUTORIALS = [
    {
        "id": "1",
        "title": "Getting Started with Facebook",
        "description": "Learn how to create an account, find friends, and make your first post on Facebook",
        "category": "facebook",
        "platform": "facebook",
        "difficulty": "beginner",
        "estimated_minutes": 15,
        "steps": [
            {
                "title": "Creating Your Account",
                "instruction": 'Visit facebook.com and click "Create New Account". Fill in your name, email, password, and birthday.',
                "description": (
                    "Open your web browser and type facebook.com in the address bar. "
                    "Press the green \"Create New Account\" button and fill in the form. "
                    "Facebook sends a code to your email or phone to confirm it is really you."
                ),
                "image_url": "/images/facebook-signup.png",
                "video_url": FACEBOOK_BASICS_VIDEO,
                "duration": 3,
                "tips": [
                    "Use an email address you check regularly",
                    "Pick a password you can remember but others can't guess",
                    "Write your password down and keep it somewhere safe",
                ],
            },
            {
                "title": "Setting Up Your Profile",
                "instruction": "Add a profile picture and cover photo. This helps friends recognize you.",
                "description": (
                    "Click your name at the top of the page to open your profile. "
                    "Click the camera icon on the round picture to upload a photo of yourself, "
                    "then use \"Add Cover Photo\" for the wide picture at the top."
                ),
                "image_url": "/images/facebook-profile.png",
                "video_url": FACEBOOK_BASICS_VIDEO,
                "duration": 2,
                "tips": [
                    "Choose a clear, well-lit photo where your face is visible",
                    "You can change both photos at any time",
                ],
            },
            {
                "title": "Finding Friends",
                "instruction": "Search for friends by name or let Facebook suggest friends from your email contacts.",
                "description": (
                    "Type a name in the search bar at the top of any page. "
                    "When you find someone you know, click \"Add Friend\". "
                    "They need to accept before you are connected."
                ),
                "image_url": "/images/facebook-friends.png",
                "video_url": FACEBOOK_BASICS_VIDEO,
                "duration": 4,
                "tips": [
                    "Only add people you know and trust in real life",
                    "You can cancel a request before it is accepted",
                ],
            },
            {
                "title": "Making Your First Post",
                "instruction": "Click \"What's on your mind?\" at the top of your News Feed to share updates with friends.",
                "description": (
                    "Click inside the \"What's on your mind?\" box and type your message. "
                    "Check who can see the post with the audience button, then click \"Post\"."
                ),
                "image_url": "/images/facebook-post.png",
                "video_url": FACEBOOK_BASICS_VIDEO,
                "duration": 3,
                "tips": [
                    "Think before you post: things online can be hard to remove",
                    "Use the three dots on a post to edit or delete it later",
                ],
            },
            {
                "title": "Liking and Commenting",
                "instruction": "Engage with friends' posts by clicking \"Like\" or leaving a comment.",
                "description": (
                    "Click the thumbs-up under a post to like it; click again to undo. "
                    "Click \"Comment\" to write a reply that others who see the post can read."
                ),
                "image_url": "/images/facebook-engage.png",
                "video_url": FACEBOOK_BASICS_VIDEO,
                "duration": 3,
                "tips": [
                    "Hold the Like button to choose other reactions such as Love or Care",
                    "You can edit or delete your own comments",
                ],
            },
        ],
    },
    {
        "id": "2",
        "title": "Facebook Privacy Settings",
        "description": "Learn how to control who sees your posts and personal information",
        "category": "facebook",
        "platform": "facebook",
        "difficulty": "intermediate",
        "estimated_minutes": 12,
        "steps": [
            {
                "title": "Accessing Privacy Settings",
                "instruction": 'Click the arrow in the top right corner and select "Settings & Privacy", then "Settings".',
                "image_url": "/images/facebook-privacy1.png",
                "video_url": FACEBOOK_PRIVACY_VIDEO,
                "duration": 2,
                "tips": [
                    "Review your privacy settings every few months",
                    "The menu looks different on phones but has the same options",
                ],
            },
            {
                "title": "Controlling Post Visibility",
                "instruction": 'Go to "Privacy" settings to choose who can see your future posts (Public, Friends, Only Me).',
                "image_url": "/images/facebook-privacy2.png",
                "video_url": FACEBOOK_PRIVACY_VIDEO,
                "duration": 3,
                "tips": [
                    "\"Friends\" is a good default for most people",
                    "\"Limit Past Posts\" makes old public posts friends-only",
                ],
            },
            {
                "title": "Managing Profile Information",
                "instruction": "Control who can see your email, phone number, and other personal details.",
                "image_url": "/images/facebook-privacy3.png",
                "video_url": FACEBOOK_PRIVACY_VIDEO,
                "duration": 3,
                "tips": [
                    "Set your phone number and email to \"Only Me\"",
                ],
            },
            {
                "title": "Blocking Users",
                "instruction": "Learn how to block people you don't want to interact with on Facebook.",
                "image_url": "/images/facebook-block.png",
                "video_url": FACEBOOK_PRIVACY_VIDEO,
                "duration": 2,
                "tips": [
                    "Blocked people are not told that you blocked them",
                ],
            },
            {
                "title": "Reviewing Activity Log",
                "instruction": "Check your activity log to see all your posts and interactions.",
                "image_url": "/images/facebook-activity.png",
                "video_url": FACEBOOK_PRIVACY_VIDEO,
                "duration": 2,
                "tips": [
                    "Anything you don't recognise could mean someone else used your account",
                ],
            },
        ],
    },
    {
        "id": "3",
        "title": "Sending Messages on WhatsApp",
        "description": "Learn to send text messages, photos, and make voice calls with WhatsApp",
        "category": "whatsapp",
        "platform": "whatsapp",
        "difficulty": "beginner",
        "estimated_minutes": 10,
        "steps": [
            {
                "title": "Download and Install",
                "instruction": "Download WhatsApp from your phone's app store and verify your phone number.",
                "image_url": "/images/whatsapp-download.png",
                "video_url": WHATSAPP_VIDEO,
                "duration": 2,
                "tips": ["WhatsApp is free; never pay for it"],
            },
            {
                "title": "Finding Contacts",
                "instruction": "WhatsApp automatically shows contacts from your phone who also use WhatsApp.",
                "image_url": "/images/whatsapp-contacts.png",
                "video_url": WHATSAPP_VIDEO,
                "duration": 2,
                "tips": ["Save a number in your phone's contacts first if someone is missing"],
            },
            {
                "title": "Sending a Text Message",
                "instruction": "Tap on a contact, type your message in the text box, and press send.",
                "image_url": "/images/whatsapp-text.png",
                "video_url": WHATSAPP_VIDEO,
                "duration": 2,
                "tips": ["Two blue ticks mean your message has been read"],
            },
            {
                "title": "Sending Photos and Videos",
                "instruction": "Tap the attachment icon (paperclip) next to the text box to send media files.",
                "image_url": "/images/whatsapp-media.png",
                "video_url": WHATSAPP_VIDEO,
                "duration": 2,
                "tips": ["You can add a caption before sending a photo"],
            },
            {
                "title": "Making Voice and Video Calls",
                "instruction": "Tap the phone or video icon at the top right to start a call.",
                "image_url": "/images/whatsapp-call.png",
                "video_url": WHATSAPP_VIDEO,
                "duration": 2,
                "tips": ["Calls over Wi-Fi don't use your mobile data"],
            },
        ],
    },
    {
        "id": "4",
        "title": "WhatsApp Groups and Broadcast",
        "description": "Learn to create groups and send messages to multiple contacts",
        "category": "whatsapp",
        "platform": "whatsapp",
        "difficulty": "intermediate",
        "estimated_minutes": 8,
        "steps": [
            {
                "title": "Creating a Group",
                "instruction": 'Tap "New Group" and select contacts you want to add to the group.',
                "image_url": "/images/whatsapp-group1.png",
                "video_url": WHATSAPP_GROUPS_VIDEO,
                "duration": 2,
                "tips": ["A family group makes sharing photos with everyone easy"],
            },
            {
                "title": "Managing Group Settings",
                "instruction": "Set group name, photo, and control who can send messages.",
                "image_url": "/images/whatsapp-group2.png",
                "video_url": WHATSAPP_GROUPS_VIDEO,
                "duration": 2,
                "tips": ["Mute a busy group so it doesn't ring for every message"],
            },
            {
                "title": "Using Broadcast Lists",
                "instruction": "Create broadcast lists to send messages to multiple contacts without creating a group.",
                "image_url": "/images/whatsapp-broadcast.png",
                "video_url": WHATSAPP_GROUPS_VIDEO,
                "duration": 2,
                "tips": ["Replies to a broadcast come back to you privately"],
            },
            {
                "title": "Group Admin Features",
                "instruction": "Learn how to manage members and control group settings as an admin.",
                "image_url": "/images/whatsapp-admin.png",
                "video_url": WHATSAPP_GROUPS_VIDEO,
                "duration": 2,
                "tips": ["You can make another member an admin to share the work"],
            },
        ],
    },
    {
        "id": "5",
        "title": "Watching Videos on YouTube",
        "description": "Discover how to search for videos, create playlists, and subscribe to channels",
        "category": "youtube",
        "platform": "youtube",
        "difficulty": "beginner",
        "estimated_minutes": 12,
        "steps": [
            {
                "title": "Searching for Videos",
                "instruction": "Use the search bar at the top to find videos about any topic you're interested in.",
                "image_url": "/images/youtube-search.png",
                "video_url": YOUTUBE_VIDEO,
                "duration": 2,
                "tips": ["Tap the microphone to search by speaking"],
            },
            {
                "title": "Playing and Pausing",
                "instruction": "Tap the play button to start a video. Tap again to pause.",
                "image_url": "/images/youtube-play.png",
                "video_url": YOUTUBE_VIDEO,
                "duration": 1,
                "tips": ["Drag the red bar to jump to another part of the video"],
            },
            {
                "title": "Adjusting Volume and Brightness",
                "instruction": "Use your phone's volume buttons for sound. Swipe up/down on the screen for brightness.",
                "video_url": YOUTUBE_VIDEO,
                "duration": 2,
                "tips": ["Turn on captions with the CC button if the sound is hard to follow"],
            },
            {
                "title": "Liking and Subscribing",
                "instruction": 'Tap the thumbs-up to like a video. Tap "Subscribe" to follow a channel.',
                "image_url": "/images/youtube-subscribe.png",
                "video_url": YOUTUBE_VIDEO,
                "duration": 2,
                "tips": ["Subscribing is free"],
            },
            {
                "title": "Creating Playlists",
                "instruction": 'Tap "Save" under a video to add it to a playlist for later watching.',
                "image_url": "/images/youtube-playlist.png",
                "video_url": YOUTUBE_VIDEO,
                "duration": 3,
                "tips": ["Find your playlists later under the Library tab"],
            },
            {
                "title": "Sharing Videos",
                "instruction": "Tap the share icon to send videos to friends via message or email.",
                "image_url": "/images/youtube-share.png",
                "video_url": YOUTUBE_VIDEO,
                "duration": 2,
                "tips": ["Sharing sends a link; your friend doesn't need an account to watch"],
            },
        ],
    },
]
