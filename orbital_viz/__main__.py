from orbital_viz.generators.orbital_artifacts import main

if __name__ == "__main__":
    main()
