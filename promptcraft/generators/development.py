"""Mobile and web application templates.

Both generators branch on ``detail_level``: ``architecture`` renders the
design overview and roadmap, ``full_code`` adds runnable project skeletons.
"""

from typing import Dict, List

from ..engine.models import DetailLevel, RequestType
from .base import GenerationContext, LengthScale, PromptGenerator, bullets, title

PLATFORM_STACKS: Dict[str, Dict[str, str]] = {
    "Android": {
        "language": "Kotlin",
        "fence": "kotlin",
        "ui": "Jetpack Compose",
        "state": "StateFlow + ViewModel",
        "networking": "Retrofit2 + OkHttp + Moshi",
        "database": "Room",
        "di": "Hilt",
        "navigation": "Navigation Compose",
        "tts": "android.speech.tts.TextToSpeech",
        "speech": "SpeechRecognizer",
        "store": "Google Play",
        "unit_tests": "JUnit + MockK",
        "ui_tests": "Espresso / Compose UI tests",
    },
    "iOS": {
        "language": "Swift",
        "fence": "swift",
        "ui": "SwiftUI",
        "state": "Combine + ObservableObject",
        "networking": "URLSession + Alamofire",
        "database": "CoreData/SwiftData",
        "di": "Swift DI",
        "navigation": "NavigationStack",
        "tts": "AVSpeechSynthesizer",
        "speech": "SFSpeechRecognizer",
        "store": "App Store",
        "unit_tests": "XCTest",
        "ui_tests": "XCUITest",
    },
    "Cross-platform": {
        "language": "TypeScript (React Native)",
        "fence": "typescript",
        "ui": "React Native",
        "state": "Redux Toolkit / Zustand",
        "networking": "Axios",
        "database": "SQLite/Realm",
        "di": "React Context",
        "navigation": "React Navigation",
        "tts": "expo-speech",
        "speech": "expo-speech",
        "store": "Google Play and App Store",
        "unit_tests": "Jest + React Native Testing Library",
        "ui_tests": "Detox",
    },
}

_ARCHITECTURE_DIAGRAM = """```
┌─────────────────────────────────────────┐
│           Presentation Layer            │
│   Views (UI/Screens) ◄── ViewModels     │
├─────────────────────────────────────────┤
│             Domain Layer                │
│   Use Cases (business orchestration)    │
├─────────────────────────────────────────┤
│              Data Layer                 │
│   Repositories ── API │ Cache │ DB      │
└─────────────────────────────────────────┘
```"""

_SETUP_SNIPPETS = {
    "Android": """// app/build.gradle.kts
plugins {
    id("com.android.application")
    id("org.jetbrains.kotlin.android")
    id("com.google.dagger.hilt.android")
    id("org.jetbrains.kotlin.kapt")
}

dependencies {
    implementation("androidx.core:core-ktx:1.12.0")
    implementation("androidx.lifecycle:lifecycle-runtime-ktx:2.7.0")
    implementation("androidx.activity:activity-compose:1.8.2")
    implementation(platform("androidx.compose:compose-bom:2024.02.00"))
    implementation("androidx.compose.material3:material3")
    implementation("androidx.navigation:navigation-compose:2.7.7")
    implementation("com.google.dagger:hilt-android:2.50")
    kapt("com.google.dagger:hilt-compiler:2.50")
    implementation("com.squareup.retrofit2:retrofit:2.9.0")
    implementation("com.squareup.retrofit2:converter-moshi:2.9.0")
    implementation("androidx.room:room-runtime:2.6.1")
    implementation("androidx.room:room-ktx:2.6.1")
    kapt("androidx.room:room-compiler:2.6.1")
}""",
    "iOS": """// Package.swift dependencies
dependencies: [
    .package(url: "https://github.com/Alamofire/Alamofire.git", from: "5.8.0")
]

@main
struct MainApp: App {
    var body: some Scene {
        WindowGroup {
            ContentView()
        }
    }
}""",
    "Cross-platform": """// package.json
{
  "dependencies": {
    "@react-navigation/native": "^6.1.0",
    "react-native": "0.73.0",
    "axios": "^1.6.0",
    "zustand": "^4.5.0"
  }
}""",
}

_LAYER_SNIPPETS = {
    "Android": """class AppRepository @Inject constructor(
    private val api: ApiService,
    private val dao: AppDao
) {
    fun observeItems(): Flow<List<Item>> = dao.observeAll()

    suspend fun refresh() {
        dao.upsertAll(api.fetchItems())
    }
}

@HiltViewModel
class MainViewModel @Inject constructor(
    private val repository: AppRepository
) : ViewModel() {
    private val _uiState = MutableStateFlow<UiState>(UiState.Loading)
    val uiState: StateFlow<UiState> = _uiState.asStateFlow()

    fun load() {
        viewModelScope.launch {
            runCatching { repository.refresh() }
                .onFailure { _uiState.value = UiState.Error(it.message) }
            repository.observeItems().collect { _uiState.value = UiState.Success(it) }
        }
    }
}""",
    "iOS": """final class DataRepository {
    func fetchItems() async throws -> [Item] {
        // Network call + local cache
    }
}

@MainActor
final class MainViewModel: ObservableObject {
    @Published var state: ViewState = .loading
    private let repository: DataRepository

    init(repository: DataRepository) {
        self.repository = repository
    }

    func load() async {
        do {
            state = .loaded(try await repository.fetchItems())
        } catch {
            state = .failed(error.localizedDescription)
        }
    }
}""",
    "Cross-platform": """export const useItemStore = create<ItemState>((set) => ({
  items: [],
  status: 'idle',
  load: async () => {
    set({ status: 'loading' });
    try {
      const { data } = await api.get<Item[]>('/items');
      set({ items: data, status: 'ready' });
    } catch (error) {
      set({ status: 'error' });
    }
  },
}));""",
}

_PERMISSIONS = {
    "Android": {
        "Speech Recognition": "android.permission.RECORD_AUDIO",
        "Location Services": "android.permission.ACCESS_FINE_LOCATION",
        "Camera Access": "android.permission.CAMERA",
        "Push Notifications": "android.permission.POST_NOTIFICATIONS",
        "Activity Tracking": "android.permission.ACTIVITY_RECOGNITION",
    },
    "iOS": {
        "Speech Recognition": "NSMicrophoneUsageDescription, NSSpeechRecognitionUsageDescription",
        "Location Services": "NSLocationWhenInUseUsageDescription",
        "Camera Access": "NSCameraUsageDescription",
        "Activity Tracking": "NSMotionUsageDescription",
    },
}


def _permissions(platform: str, features: List[str]) -> str:
    if platform == "Android":
        lines = ['<uses-permission android:name="android.permission.INTERNET" />']
        lines += [
            f'<uses-permission android:name="{permission}" />'
            for feature, permission in _PERMISSIONS["Android"].items()
            if feature in features
        ]
        return "```xml\n<!-- AndroidManifest.xml -->\n" + "\n".join(lines) + "\n```"
    if platform == "iOS":
        keys = [
            f"{permission} ({feature})"
            for feature, permission in _PERMISSIONS["iOS"].items()
            if feature in features
        ]
        return "Info.plist keys:\n" + (bullets(keys) if keys else "• None beyond defaults")
    return "Configure permissions in app.json (Expo) or the native projects as required."


class AppDevelopmentGenerator(PromptGenerator):
    """Mobile application prompt with platform-specific stack defaults."""

    request_type = RequestType.APP_DEVELOPMENT
    length_scale = LengthScale("screens", (3, 5), (6, 10), (12, 20))

    def build(self, context: GenerationContext) -> str:
        platform = context.detail("platform", "Cross-platform")
        stack = PLATFORM_STACKS.get(platform, PLATFORM_STACKS["Cross-platform"])
        app_type = context.detail("app_type", "general")
        features = list(context.detail("features", []))

        stack_rows = [
            ("Language", stack["language"]),
            ("UI Framework", stack["ui"]),
            ("State Management", stack["state"]),
            ("Networking", stack["networking"]),
            ("Database", stack["database"]),
            ("DI", stack["di"]),
            ("Navigation", stack["navigation"]),
        ]
        if "Text-to-Speech (TTS)" in features:
            stack_rows.append(("TTS", stack["tts"]))
        if "Speech Recognition" in features:
            stack_rows.append(("Speech", stack["speech"]))
        table = "| Layer | Technology |\n|-------|------------|\n" + "\n".join(
            f"| {layer} | {tech} |" for layer, tech in stack_rows
        )

        sections = [
            "You are a senior mobile application architect with 10+ years of experience "
            f"building production apps for {platform}.",
            f"Design and build a complete {platform} application: {context.subject}",
            "**PROJECT SPECIFICATIONS:**\n"
            f"App Type: {title(app_type)} Application\n"
            f"Platform: {platform}\n"
            f"Language: {stack['language']}\n"
            f"Scope: {self.target(context)} covering the core user journeys",
            "**CORE FEATURES:**\n"
            + (bullets(features) if features else "• Core functionality as described"),
            f"**ARCHITECTURE DESIGN:**\nPattern: Clean Architecture with MVVM\n{_ARCHITECTURE_DIAGRAM}",
            f"**TECHNOLOGY STACK:**\n{table}",
        ]

        if context.options.detail_level is DetailLevel.FULL_CODE:
            setup = _SETUP_SNIPPETS.get(platform, _SETUP_SNIPPETS["Cross-platform"])
            layers = _LAYER_SNIPPETS.get(platform, _LAYER_SNIPPETS["Cross-platform"])
            fence = stack["fence"]
            sections.extend(
                [
                    "**IMPLEMENTATION PHASES:**\n\n"
                    "Phase 1: Project Setup & Core Architecture\n"
                    f"```{fence}\n{setup}\n```\n\n"
                    "Phase 2: Data & Presentation Layers\n"
                    f"```{fence}\n{layers}\n```\n\n"
                    "Phase 3: Screens and navigation for each feature\n\n"
                    "Phase 4: Feature integration, offline support and polish",
                    f"**PERMISSIONS REQUIRED:**\n{_permissions(platform, features)}",
                ]
            )
        else:
            sections.append(
                "**IMPLEMENTATION ROADMAP:**\n"
                + bullets(
                    [
                        "Phase 1: Project setup, dependency injection and navigation shell",
                        "Phase 2: Data layer (API client, local database, repositories)",
                        "Phase 3: Domain use cases and ViewModels",
                        "Phase 4: Screens for each core feature",
                        "Phase 5: Hardening, analytics and store release",
                    ]
                )
            )

        sections.extend(
            [
                "**ERROR HANDLING & PERFORMANCE:**\n"
                + bullets(
                    [
                        "User-friendly error states for network and validation failures",
                        "Offline mode with graceful degradation",
                        "Lazy loading for lists and image caching",
                        "Heavy work off the main thread",
                    ]
                ),
                "**TESTING REQUIREMENTS:**\n"
                + bullets(
                    [
                        f"Unit tests: ViewModels, use cases, repositories ({stack['unit_tests']})",
                        "Integration tests: API + database",
                        f"UI tests: critical user flows ({stack['ui_tests']})",
                    ]
                ),
                "**DELIVERABLES:**\n"
                + bullets(
                    [
                        "Complete source code with comments",
                        "Architecture diagram",
                        "README with setup instructions",
                        "Unit test coverage >70%",
                        f"{stack['store']} submission checklist",
                    ],
                    marker="□",
                ),
            ]
        )
        return "\n\n".join(sections)


_WEB_STRUCTURE = """```
src/
├── app/
│   ├── (auth)/login/page.tsx
│   ├── (dashboard)/page.tsx
│   ├── api/[...route]/route.ts
│   ├── layout.tsx
│   └── page.tsx
├── components/
│   ├── ui/           # Reusable UI components
│   └── forms/        # Form components
├── lib/
│   ├── db.ts         # Database connection
│   ├── auth.ts       # Auth configuration
│   └── utils.ts      # Utility functions
└── types/            # TypeScript types
```"""

_WEB_SNIPPET = """// src/app/api/items/route.ts
import { NextResponse } from 'next/server';
import { z } from 'zod';
import { db } from '@/lib/db';

const ItemInput = z.object({ name: z.string().min(1).max(200) });

export async function GET() {
  const items = await db.item.findMany({ orderBy: { createdAt: 'desc' } });
  return NextResponse.json(items);
}

export async function POST(request: Request) {
  const parsed = ItemInput.safeParse(await request.json());
  if (!parsed.success) {
    return NextResponse.json({ error: parsed.error.flatten() }, { status: 400 });
  }
  const item = await db.item.create({ data: parsed.data });
  return NextResponse.json(item, { status: 201 });
}"""


class WebDevelopmentGenerator(PromptGenerator):
    request_type = RequestType.WEB_DEVELOPMENT
    length_scale = LengthScale("pages", (3, 5), (6, 10), (12, 20))

    def build(self, context: GenerationContext) -> str:
        features = list(context.detail("features", []))
        needs_db = "Database Design" in features or "User Authentication" in features
        needs_auth = "User Authentication" in features

        sections = [
            "You are a full-stack web architect specializing in modern JavaScript "
            "frameworks and production-grade web applications.",
            f"Build a modern, production-ready web application: {context.subject}",
            "**TECHNOLOGY STACK:**\n"
            + bullets(
                [
                    "Framework: Next.js 14+ (App Router)",
                    "Styling: Tailwind CSS + shadcn/ui",
                    "State: React Server Components + Zustand (client state)",
                    "Database: "
                    + ("PostgreSQL with Prisma ORM" if needs_db else "As needed"),
                    "Auth: " + ("NextAuth.js / Auth.js" if needs_auth else "If required"),
                    "Deployment: Vercel (recommended)",
                ]
            ),
            f"**SCOPE:**\n{self.target(context)}, mobile-first and responsive",
            "**FEATURES TO BUILD:**\n"
            + (bullets(features) if features else "• Core functionality as described"),
            f"**PROJECT STRUCTURE:**\n{_WEB_STRUCTURE}",
            "**IMPLEMENTATION REQUIREMENTS:**\n"
            + bullets(
                [
                    "Server-side rendering for SEO-critical pages",
                    "API routes for backend logic with input validation",
                    "Accessibility (WCAG 2.1 AA)",
                    "Performance budgets (Core Web Vitals)",
                    "Error boundaries and loading states",
                ]
            ),
        ]

        if context.options.detail_level is DetailLevel.FULL_CODE:
            sections.append(
                f"**REFERENCE IMPLEMENTATION:**\n```typescript\n{_WEB_SNIPPET}\n```\n"
                "Provide complete code for every page, component and API route listed above."
            )

        sections.extend(
            [
                "**CODE QUALITY:**\n"
                + bullets(
                    [
                        "TypeScript strict mode",
                        "ESLint + Prettier configuration",
                        "Unit tests for utilities, E2E tests for critical flows",
                    ]
                ),
                "**DELIVERABLES:**\n"
                + bullets(
                    [
                        "Complete, deployable application",
                        "Environment configuration guide",
                        "API documentation",
                        "Deployment instructions",
                    ],
                    marker="□",
                ),
            ]
        )
        return "\n\n".join(sections)
